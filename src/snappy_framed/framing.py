"""
One-shot helpers for framed Snappy data held in memory.

These wrap `FramedEncoder` and `FramedDecoder` around `io.BytesIO`, for
callers that already have the whole payload, such as request/response
messages on a network protocol.
"""

from __future__ import annotations

import io

from .config import FramingConfig
from .decoder import CrcMode, FramedDecoder
from .encoder import FramedEncoder
from .protocols import BlockCodec


def frame_compress(
    data: bytes | bytearray | memoryview,
    *,
    config: FramingConfig | None = None,
    codec: BlockCodec | None = None,
) -> bytes:
    """
    Compress data into a complete framed stream.

    Args:
        data: Uncompressed input bytes.
        config: Encoder options.
        codec: Block compressor. Defaults to raw Snappy.

    Returns:
        The stream identifier followed by one chunk per 64 KiB of input.
        Empty input yields the stream identifier alone.
    """
    sink = io.BytesIO()
    with FramedEncoder(sink, config=config, codec=codec) as encoder:
        encoder.write(data)
    return sink.getvalue()


def frame_decompress(
    data: bytes | bytearray | memoryview,
    mode: CrcMode = CrcMode.VERIFY,
    *,
    config: FramingConfig | None = None,
    codec: BlockCodec | None = None,
) -> bytes:
    """
    Decompress a complete framed stream.

    Concatenated streams decode to the concatenation of their contents,
    since repeated stream identifiers are skipped.

    Args:
        data: Framed stream.
        mode: Whether to verify chunk checksums.
        config: Decoder options.
        codec: Block decompressor. Defaults to raw Snappy.

    Returns:
        Original uncompressed data.

    Raises:
        FramingError: If the stream is truncated, corrupted or malformed.
    """
    with FramedDecoder(io.BytesIO(data), mode, config=config, codec=codec) as decoder:
        return decoder.readall()
