"""
Size-tiered envelopes for Lambda invocation results.
"""

from .config import EnvelopeConfig, get_config
from .core.exceptions import (
    CompressionError,
    DecompressionError,
    EnvelopeError,
    PayloadParseError,
    PresignError,
    RemoteFetchError,
    StorageUploadError,
)
from .models import Encoding, RawInvocationResult, Response
from .services import (
    ResponseBuilder,
    ResponseResolver,
    S3ObjectStorage,
    from_raw_result,
    normalize_raw_result,
)

__version__ = "0.1.0"

__all__ = [
    "CompressionError",
    "DecompressionError",
    "Encoding",
    "EnvelopeConfig",
    "EnvelopeError",
    "PayloadParseError",
    "PresignError",
    "RawInvocationResult",
    "RemoteFetchError",
    "Response",
    "ResponseBuilder",
    "ResponseResolver",
    "S3ObjectStorage",
    "StorageUploadError",
    "from_raw_result",
    "get_config",
    "normalize_raw_result",
]
