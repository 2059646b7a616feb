"""
Raw Snappy block codec.

The framing layer only needs a block primitive. This adapter delegates to
`cramjam`, whose raw functions produce and consume unframed Snappy blocks
(varint length prefix followed by literal and copy elements).

Reference: https://github.com/google/snappy/blob/main/format_description.txt
"""

from __future__ import annotations

import cramjam

from .exceptions import DecompressionError


class SnappyBlockCodec:
    """Block codec backed by `cramjam.snappy`."""

    def compress(self, data: bytes | bytearray | memoryview) -> bytes:
        return bytes(cramjam.snappy.compress_raw(bytes(data)))

    def decompress(self, data: bytes | bytearray | memoryview) -> bytes:
        """
        Decompress a raw Snappy block.

        Raises:
            DecompressionError: If cramjam rejects the block.
        """
        try:
            return bytes(cramjam.snappy.decompress_raw(bytes(data)))
        except cramjam.DecompressionError as exc:
            raise DecompressionError(f"Snappy decompression failure: {exc}") from exc
