"""
Custom exception classes.

Every error wraps the exception that caused it; the cause is kept on
``.cause`` and its text is part of the message.
"""

from typing import Optional


class EnvelopeError(Exception):
    """Base exception class for response encoding and decoding."""

    message = "response envelope error"

    def __init__(self, cause: Optional[BaseException] = None, detail: Optional[str] = None):
        self.cause = cause
        message = self.message
        if detail:
            message = f"{message} ({detail})"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class PayloadParseError(EnvelopeError):
    """Raised when the invocation payload is not valid JSON."""

    message = "failed to parse response payload"


class CompressionError(EnvelopeError):
    """Raised when the response can't be gzip compressed."""

    message = "failed to compress response"


class DecompressionError(EnvelopeError):
    """Raised when a gzip-tier body can't be decoded back into a response."""

    message = "failed to parse compressed response"


class StorageUploadError(EnvelopeError):
    """Raised when the response object can't be stored."""

    message = "failed to upload response object to S3"

    def __init__(self, bucket: str, key: str, cause: BaseException):
        self.bucket = bucket
        self.key = key
        super().__init__(cause, detail=f"s3://{bucket}/{key}")


class PresignError(EnvelopeError):
    """Raised when a retrieval URL can't be generated for a stored response."""

    message = "failed to generate S3 pre-signed url"

    def __init__(self, bucket: str, key: str, cause: BaseException):
        self.bucket = bucket
        self.key = key
        super().__init__(cause, detail=f"s3://{bucket}/{key}")


class RemoteFetchError(EnvelopeError):
    """Raised when a stored response can't be fetched or parsed."""

    message = "failed to parse s3 response"

    def __init__(self, url: str, cause: BaseException):
        self.url = url
        super().__init__(cause)
