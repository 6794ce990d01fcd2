"""
Response Builder Service

Produces the envelope that is returned through the invocation transport.
Responses are escalated through three tiers until the serialized envelope
fits under the size threshold:

    identity -> gzip (base64 body) -> s3 (pre-signed URL body)
"""

import asyncio
import base64
import logging
import uuid
from typing import Any, Mapping, Optional, Union

from ..config import DEFAULT_SIZE_THRESHOLD, DEFAULT_URL_TTL, EnvelopeConfig
from ..core.codec import CompressionCodec, GzipCodec
from ..core.exceptions import CompressionError, PresignError, StorageUploadError
from ..models.response import Encoding, Response
from .storage import ObjectStorage, S3ObjectStorage

logger = logging.getLogger("envelope.builder")

ResponseLike = Union[Response, Mapping[str, Any], None]


class ResponseBuilder:
    def __init__(
        self,
        bucket: str,
        storage: ObjectStorage,
        threshold: int = DEFAULT_SIZE_THRESHOLD,
        url_ttl: int = DEFAULT_URL_TTL,
        codec: Optional[CompressionCodec] = None,
    ):
        """
        Args:
            bucket: Bucket that receives responses too large for the gzip tier
            storage: ObjectStorage used for upload and URL signing
            threshold: Max envelope size in bytes for the inline tiers
            url_ttl: Validity of the pre-signed URL in seconds
            codec: CompressionCodec for the gzip tier (gzip by default)
        """
        if not bucket:
            raise ValueError("bucket is required")

        self.bucket = bucket
        self.storage = storage
        self.threshold = threshold
        self.url_ttl = url_ttl
        self.codec = codec or GzipCodec()

    @classmethod
    def from_config(
        cls, config: EnvelopeConfig, storage: Optional[ObjectStorage] = None
    ) -> "ResponseBuilder":
        """Build a ResponseBuilder wired to the configured S3 bucket."""
        if not config.RESPONSE_BUCKET:
            raise ValueError("bucket is required")

        return cls(
            bucket=config.RESPONSE_BUCKET,
            storage=storage or S3ObjectStorage.from_config(config),
            threshold=config.RESPONSE_SIZE_THRESHOLD,
            url_ttl=config.PRESIGNED_URL_TTL,
        )

    async def build(self, response_like: ResponseLike = None) -> Response:
        """
        Build the smallest-effort envelope that fits under the threshold.

        Raises:
            CompressionError: gzip tier failed (no fallback to storage)
            StorageUploadError: storing the response failed
            PresignError: signing the retrieval URL failed
        """
        response = self.build_raw(response_like)
        size = response.byte_size()
        if size <= self.threshold:
            return response

        compressed = self.build_compressed(response)
        compressed_size = compressed.byte_size()
        if compressed_size <= self.threshold:
            logger.info(
                "Response compressed to fit threshold",
                extra={
                    "original_size": size,
                    "compressed_size": compressed_size,
                    "threshold": self.threshold,
                },
            )
            return compressed

        logger.info(
            "Response exceeds threshold after compression, storing in S3",
            extra={
                "original_size": size,
                "compressed_size": compressed_size,
                "threshold": self.threshold,
            },
        )
        return await self.build_stored(response)

    def build_raw(self, response_like: ResponseLike = None) -> Response:
        """Identity tier: the response itself."""
        return Response.from_options(response_like)

    def build_compressed(self, response: ResponseLike) -> Response:
        """Gzip tier: base64 of the gzipped identity JSON."""
        response = Response.from_options(response)
        try:
            compressed = self.codec.compress(response.to_json().encode("utf-8"))
        except Exception as e:
            logger.error(
                "Response compression failed",
                extra={"error_type": type(e).__name__, "error_detail": str(e)},
            )
            raise CompressionError(e) from e

        return Response(
            statusCode=response.statusCode,
            encoding=Encoding.GZIP,
            body=base64.b64encode(compressed).decode("ascii"),
        )

    async def build_stored(self, response: ResponseLike) -> Response:
        """S3 tier: upload the identity JSON and return a pre-signed URL to it."""
        response = Response.from_options(response)
        key = str(uuid.uuid4())
        body = response.to_json().encode("utf-8")

        try:
            await asyncio.to_thread(self.storage.put_object, self.bucket, key, body)
        except Exception as e:
            logger.error(
                f"Failed to upload response object to s3://{self.bucket}/{key}",
                extra={"error_type": type(e).__name__, "error_detail": str(e)},
            )
            raise StorageUploadError(self.bucket, key, e) from e

        try:
            url = await asyncio.to_thread(
                self.storage.presign_get, self.bucket, key, self.url_ttl
            )
        except Exception as e:
            logger.error(
                f"Failed to pre-sign s3://{self.bucket}/{key}",
                extra={"error_type": type(e).__name__, "error_detail": str(e)},
            )
            raise PresignError(self.bucket, key, e) from e

        logger.debug(
            "Response stored",
            extra={"bucket": self.bucket, "key": key, "size": len(body), "ttl": self.url_ttl},
        )
        return Response(statusCode=response.statusCode, encoding=Encoding.S3, body=url)
