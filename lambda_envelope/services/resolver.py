"""
Response Resolver Service

Reverses whichever tier ResponseBuilder picked. The envelope's encoding tag
is the only metadata needed:

- identity: returned as-is
- gzip: base64 decode, gunzip, parse the embedded envelope
- s3: GET the pre-signed URL, parse the stored envelope
"""

import base64
import json
import logging
from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import ValidationError

from ..config import EnvelopeConfig, get_config
from ..core.codec import CompressionCodec, GzipCodec
from ..core.exceptions import DecompressionError, RemoteFetchError
from ..core.http_client import HttpClientFactory
from ..models.invocation import RawInvocationResult
from ..models.response import Encoding, Response
from .normalizer import normalize_raw_result

logger = logging.getLogger("envelope.resolver")


class ResponseResolver:
    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        codec: Optional[CompressionCodec] = None,
        client_factory: Optional[HttpClientFactory] = None,
    ):
        """
        Args:
            client: Shared httpx.AsyncClient used for the s3 tier. When omitted
                a short-lived client is created per fetch.
            codec: CompressionCodec for the gzip tier (gzip by default)
            client_factory: Factory for the short-lived clients
        """
        self.client = client
        self.codec = codec or GzipCodec()
        self.client_factory = client_factory

    @classmethod
    def from_config(
        cls, config: EnvelopeConfig, client: Optional[httpx.AsyncClient] = None
    ) -> "ResponseResolver":
        return cls(client=client, client_factory=HttpClientFactory(config))

    async def resolve(self, envelope: Union[Response, Mapping[str, Any]]) -> Response:
        """
        Recover the original response from an envelope of any tier.

        Raises:
            DecompressionError: gzip body can't be decoded
            RemoteFetchError: stored response can't be fetched or parsed
        """
        envelope = Response.from_options(envelope)

        if envelope.encoding == Encoding.GZIP:
            return self.resolve_compressed(envelope)
        if envelope.encoding == Encoding.S3:
            return await self.resolve_stored(envelope)
        return envelope

    def resolve_compressed(self, envelope: Response) -> Response:
        try:
            if not isinstance(envelope.body, str):
                raise TypeError(
                    f"compressed body must be base64 text, got {type(envelope.body).__name__}"
                )
            compressed = base64.b64decode(envelope.body, validate=True)
            decoded = json.loads(self.codec.decompress(compressed).decode("utf-8"))
            return Response.from_options(decoded)
        except Exception as e:
            logger.error(
                "Failed to decode compressed response",
                extra={"error_type": type(e).__name__, "error_detail": str(e)},
            )
            raise DecompressionError(e) from e

    async def resolve_stored(self, envelope: Response) -> Response:
        url = envelope.body
        if not isinstance(url, str):
            raise RemoteFetchError(
                repr(url), TypeError(f"s3 body must be a URL, got {type(url).__name__}")
            )

        try:
            if self.client is not None:
                text = await self._fetch(self.client, url)
            else:
                factory = self.client_factory or HttpClientFactory(get_config())
                async with factory.create_async_client() as client:
                    text = await self._fetch(client, url)
            return Response.from_options(json.loads(text))
        except (
            httpx.HTTPError,
            httpx.InvalidURL,
            ValueError,
            TypeError,
            ValidationError,
        ) as e:
            logger.error(
                "Failed to fetch stored response",
                extra={
                    "target_url": url.split("?", 1)[0],
                    "error_type": type(e).__name__,
                    "error_detail": str(e),
                },
            )
            raise RemoteFetchError(url, e) from e

    @staticmethod
    async def _fetch(client: httpx.AsyncClient, url: str) -> str:
        response = await client.get(url)
        response.raise_for_status()
        return response.text

    async def from_raw_result(
        self, raw_result: Union[RawInvocationResult, Mapping[str, Any]]
    ) -> Response:
        """Normalize a raw invocation result and reverse its encoding tier."""
        envelope = normalize_raw_result(raw_result)
        return await self.resolve(envelope)


async def from_raw_result(
    raw_result: Union[RawInvocationResult, Mapping[str, Any]],
    client: Optional[httpx.AsyncClient] = None,
) -> Response:
    """
    Turn a lambda.invoke result into the canonical Response.

    Raises:
        PayloadParseError: Payload is not valid JSON
        DecompressionError: gzip body can't be decoded
        RemoteFetchError: stored response can't be fetched or parsed
    """
    return await ResponseResolver(client=client).from_raw_result(raw_result)
