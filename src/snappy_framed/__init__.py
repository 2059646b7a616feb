"""Streaming Snappy framing format.

The framing format wraps raw Snappy blocks into a self-describing,
checksummed, chunked byte stream, so large payloads can be compressed and
decompressed incrementally over files, sockets and pipes.

Usage::

    from snappy_framed import CrcMode, FramedDecoder, FramedEncoder

    with open("data.sz", "wb") as f, FramedEncoder(f) as encoder:
        encoder.write(data)

    with open("data.sz", "rb") as f:
        original = FramedDecoder(f, CrcMode.VERIFY).read()

For payloads already in memory::

    from snappy_framed import frame_compress, frame_decompress

    original = frame_decompress(frame_compress(data))

The implementation follows the Snappy framing format:
https://github.com/google/snappy/blob/main/framing_format.txt
"""

from __future__ import annotations

from .buffer import Buffer
from .chunks import Chunk, ChunkReader, ChunkType
from .codec import SnappyBlockCodec
from .config import FramingConfig
from .constants import MAX_UNCOMPRESSED_CHUNK_SIZE, STREAM_IDENTIFIER
from .decoder import CrcMode, FramedDecoder
from .encoder import FramedEncoder
from .exceptions import (
    ChunkTooLargeError,
    CrcMismatchError,
    CrcTruncatedError,
    DecompressionError,
    FramingError,
    IncompleteChunkError,
    UnskippableChunkError,
)
from .framing import frame_compress, frame_decompress
from .masked_crc import crc32c, mask_crc, masked_crc, unmask_crc
from .protocols import BlockCodec, ByteSink, ByteSource

__all__ = [
    # Streaming API
    "FramedDecoder",
    "FramedEncoder",
    "CrcMode",
    "FramingConfig",
    # One-shot API
    "frame_compress",
    "frame_decompress",
    # Checksums
    "crc32c",
    "mask_crc",
    "masked_crc",
    "unmask_crc",
    # Building blocks
    "Buffer",
    "Chunk",
    "ChunkReader",
    "ChunkType",
    "BlockCodec",
    "ByteSink",
    "ByteSource",
    "SnappyBlockCodec",
    # Constants
    "MAX_UNCOMPRESSED_CHUNK_SIZE",
    "STREAM_IDENTIFIER",
    # Exceptions
    "FramingError",
    "IncompleteChunkError",
    "CrcTruncatedError",
    "CrcMismatchError",
    "DecompressionError",
    "ChunkTooLargeError",
    "UnskippableChunkError",
]
