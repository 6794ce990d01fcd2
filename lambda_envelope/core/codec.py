"""
Compression codecs for the gzip tier.
"""

import gzip
from typing import Protocol


class CompressionCodec(Protocol):
    """compress/decompress must be an exact inverse pair."""

    def compress(self, data: bytes) -> bytes: ...

    def decompress(self, data: bytes) -> bytes: ...


class GzipCodec:
    """gzip member format, readable by zlib.gunzip and the gzip CLI."""

    def __init__(self, compresslevel: int = 9):
        self.compresslevel = compresslevel

    def compress(self, data: bytes) -> bytes:
        return gzip.compress(data, compresslevel=self.compresslevel)

    def decompress(self, data: bytes) -> bytes:
        return gzip.decompress(data)
