"""
Object storage for oversized responses.

The builder only needs two operations: store a blob and hand out a
time-limited read URL for it. S3ObjectStorage provides both on top of a
boto3 S3 client (AWS or any S3-compatible endpoint).
"""

import logging
from typing import Any, Protocol

import boto3
from botocore.config import Config

from ..config import EnvelopeConfig
from ..core.http_client import HttpClientFactory

logger = logging.getLogger("envelope.storage")

CONTENT_TYPE_JSON = "application/json"


class ObjectStorage(Protocol):
    def put_object(self, bucket: str, key: str, body: bytes) -> None: ...

    def presign_get(self, bucket: str, key: str, ttl_seconds: int) -> str: ...


def init_storage(config: EnvelopeConfig) -> Any:
    """
    Create a boto3 S3 client from configuration.

    Credentials are resolved by the default boto3 chain.
    """
    HttpClientFactory(config).configure_global_settings()

    kwargs = {
        "region_name": config.AWS_REGION,
        "verify": config.VERIFY_SSL,
        "config": Config(
            signature_version="s3v4", s3={"addressing_style": config.S3_ADDRESSING_STYLE}
        ),
    }
    if config.S3_ENDPOINT_URL:
        kwargs["endpoint_url"] = config.S3_ENDPOINT_URL

    client = boto3.client("s3", **kwargs)
    logger.info(
        "S3 client initialized",
        extra={"endpoint": config.S3_ENDPOINT_URL or "aws", "region": config.AWS_REGION},
    )
    return client


class S3ObjectStorage:
    """ObjectStorage backed by a boto3 S3 client."""

    def __init__(self, client: Any):
        self.client = client

    @classmethod
    def from_config(cls, config: EnvelopeConfig) -> "S3ObjectStorage":
        return cls(init_storage(config))

    def put_object(self, bucket: str, key: str, body: bytes) -> None:
        self.client.put_object(
            Bucket=bucket, Key=key, Body=body, ContentType=CONTENT_TYPE_JSON
        )

    def presign_get(self, bucket: str, key: str, ttl_seconds: int) -> str:
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=ttl_seconds,
            HttpMethod="GET",
        )
