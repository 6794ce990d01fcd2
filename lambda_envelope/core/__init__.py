"""
Core logic package.

Provides shared logic such as codecs, errors and logging.
"""

from .codec import CompressionCodec, GzipCodec
from .exceptions import (
    CompressionError,
    DecompressionError,
    EnvelopeError,
    PayloadParseError,
    PresignError,
    RemoteFetchError,
    StorageUploadError,
)

__all__ = [
    "CompressionCodec",
    "GzipCodec",
    "CompressionError",
    "DecompressionError",
    "EnvelopeError",
    "PayloadParseError",
    "PresignError",
    "RemoteFetchError",
    "StorageUploadError",
]
