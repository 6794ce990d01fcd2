import os

import httpx
import pytest

from lambda_envelope.config import get_config
from lambda_envelope.models.response import Response
from lambda_envelope.services.builder import ResponseBuilder

TEST_BUCKET = "test-bucket"
TEST_URL_BASE = "https://test-bucket.test-url"

# Keep boto3 away from real credentials and metadata endpoints.
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_EC2_METADATA_DISABLED", "true")


class FakeObjectStorage:
    """In-memory ObjectStorage that hands out fake pre-signed URLs."""

    def __init__(self, url_base: str = TEST_URL_BASE):
        self.url_base = url_base
        self.objects = {}
        self.presigned = []

    def put_object(self, bucket: str, key: str, body: bytes) -> None:
        self.objects[(bucket, key)] = body

    def presign_get(self, bucket: str, key: str, ttl_seconds: int) -> str:
        self.presigned.append((bucket, key, ttl_seconds))
        return f"{self.url_base}/{key}?X-Amz-Expires={ttl_seconds}&X-Amz-Signature=abc"

    def serve(self, request: httpx.Request) -> httpx.Response:
        """respx side effect returning the stored object for a pre-signed URL."""
        key = request.url.path.lstrip("/")
        body = self.objects.get((TEST_BUCKET, key))
        if body is None:
            return httpx.Response(404, text="NoSuchKey")
        return httpx.Response(200, content=body)


@pytest.fixture(autouse=True)
def _reset_config_cache():
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def bucket_name():
    return TEST_BUCKET


@pytest.fixture
def storage():
    return FakeObjectStorage()


@pytest.fixture
def builder(bucket_name, storage):
    return ResponseBuilder(bucket=bucket_name, storage=storage)


@pytest.fixture
def sample_response():
    return Response(statusCode=500, encoding="identity", body={"data": "foo"})


@pytest.fixture
def large_response():
    return Response(statusCode=500, body={"data": ["a"] * 1000})
