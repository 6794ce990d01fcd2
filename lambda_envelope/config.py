"""
Envelope configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Synchronous Lambda responses are capped at 6 MB.
DEFAULT_SIZE_THRESHOLD = 6291456
DEFAULT_URL_TTL = 30


class EnvelopeConfig(BaseSettings):
    """
    Settings for building and resolving response envelopes.
    """

    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOG_CONFIG_PATH: str = Field(default="", description="YAML logging config path")

    # ===== Size tiers =====
    RESPONSE_BUCKET: str = Field(default="", description="Bucket for oversized responses")
    RESPONSE_SIZE_THRESHOLD: int = Field(
        default=DEFAULT_SIZE_THRESHOLD,
        gt=0,
        description="Max envelope size in bytes for inline and gzip tiers",
    )
    PRESIGNED_URL_TTL: int = Field(
        default=DEFAULT_URL_TTL, gt=0, description="Validity of pre-signed URLs (seconds)"
    )

    # ===== Storage / HTTP =====
    S3_ENDPOINT_URL: str = Field(default="", description="S3-compatible endpoint override")
    AWS_REGION: str = Field(default="us-east-1", description="Region for the S3 client")
    S3_ADDRESSING_STYLE: str = Field(
        default="auto", description="botocore addressing style (auto, path, virtual)"
    )
    VERIFY_SSL: bool = Field(default=True, description="Whether to verify SSL certificates")
    HTTP_TIMEOUT: float = Field(
        default=30.0, gt=0, description="Timeout for fetching stored responses (seconds)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )


@lru_cache(maxsize=1)
def get_config() -> EnvelopeConfig:
    """Process-wide configuration, read once from the environment."""
    return EnvelopeConfig()
