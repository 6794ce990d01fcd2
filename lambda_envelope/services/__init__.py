"""
Services package.

Provides the encode/decode pipelines and their external integrations.
"""

from .builder import ResponseBuilder
from .normalizer import normalize_raw_result
from .resolver import ResponseResolver, from_raw_result
from .storage import ObjectStorage, S3ObjectStorage

__all__ = [
    "ObjectStorage",
    "ResponseBuilder",
    "ResponseResolver",
    "S3ObjectStorage",
    "from_raw_result",
    "normalize_raw_result",
]
