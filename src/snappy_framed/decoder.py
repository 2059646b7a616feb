"""
Streaming decoder for framed Snappy data.

`FramedDecoder` is a readable raw stream. Each call to `readinto` serves
bytes from the current decoded chunk; once that runs dry it pulls chunks
from the source until one of them carries data::

    source -> input Buffer -> ChunkReader -> dispatch -> decompress
           -> CRC check -> output Buffer -> caller

Usage::

    with open("data.sz", "rb") as f:
        decoder = FramedDecoder(f, CrcMode.VERIFY)
        data = decoder.read()

Only one decoded chunk is held in memory at a time, so arbitrarily large
streams decode in bounded space.
"""

from __future__ import annotations

import io
import logging
from enum import Enum

from .buffer import Buffer
from .chunks import RESERVED_UNSKIPPABLE, ChunkReader, ChunkType
from .codec import SnappyBlockCodec
from .config import DEFAULT_CONFIG, FramingConfig
from .constants import MAX_UNCOMPRESSED_CHUNK_SIZE
from .exceptions import UnskippableChunkError
from .masked_crc import check_crc
from .protocols import BlockCodec, ByteSource

logger = logging.getLogger(__name__)


class CrcMode(Enum):
    """Should the decoder verify or ignore the CRCs in the stream?"""

    VERIFY = "verify"
    """Check every data chunk against its stored CRC."""

    IGNORE = "ignore"
    """Skip CRC checks. Corruption may still surface as a decompression error."""


class FramedDecoder(io.RawIOBase):
    """Decode a stream containing Snappy-compressed frames."""

    def __init__(
        self,
        source: ByteSource,
        mode: CrcMode = CrcMode.VERIFY,
        *,
        config: FramingConfig | None = None,
        codec: BlockCodec | None = None,
    ) -> None:
        """
        Args:
            source: Framed bytes to decode. Not closed by the decoder.
            mode: Whether to verify chunk checksums.
            config: Buffer sizing and strictness options.
            codec: Block decompressor. Defaults to raw Snappy.
        """
        super().__init__()
        self._config = config if config is not None else DEFAULT_CONFIG
        self.crc_mode = mode
        self._codec = codec if codec is not None else SnappyBlockCodec()
        self._output = Buffer(MAX_UNCOMPRESSED_CHUNK_SIZE)
        self._reader = ChunkReader(
            source,
            Buffer(self._config.input_buffer_size),
            max_chunk_length=self._config.max_chunk_length,
        )

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray | memoryview) -> int:  # type: ignore[override]
        """
        Read decoded bytes into `buffer`.

        Returns:
            Number of bytes stored; 0 once the stream has ended.

        Raises:
            FramingError: If the stream is truncated, corrupted or malformed.
            OSError: If the source fails.
        """
        if self.closed:
            raise ValueError("I/O operation on closed decoder")

        with memoryview(buffer) as view, view.cast("B") as dest:
            if self._output.empty:
                self._next_data_chunk()

            to_copy = min(self._output.buffered, len(dest))
            self._output.copy_out_and_consume(to_copy, dest)
            return to_copy

    def _next_data_chunk(self) -> None:
        """Pull chunks until one decodes to data or the stream ends."""
        byte_order = self._config.crc_byte_order

        while self._output.empty:
            chunk = self._reader.next_chunk()
            if chunk is None:
                return

            chunk_type = chunk.chunk_type

            if chunk_type == ChunkType.COMPRESSED:
                crc = chunk.crc(byte_order)
                self._store(crc, self._codec.decompress(chunk.payload))

            elif chunk_type == ChunkType.UNCOMPRESSED:
                crc = chunk.crc(byte_order)
                self._store(crc, chunk.payload)

            elif chunk_type in RESERVED_UNSKIPPABLE and self._config.reject_unskippable_chunks:
                raise UnskippableChunkError(chunk_type)

            else:
                # Reserved, padding and stream identifier chunks carry no data.
                logger.debug(
                    "Skipping Snappy chunk of type %#04x (%d bytes)", chunk_type, len(chunk.data)
                )

    def _store(self, crc: int, data: bytes | memoryview) -> None:
        if self.crc_mode is CrcMode.VERIFY:
            check_crc(crc, data)

        capacity = self._output.capacity
        if len(data) > capacity:
            logger.warning("Snappy chunk decoded to %d bytes, growing output buffer", len(data))
            self._output.add_capacity(len(data) - capacity)

        self._output.set_data(data)
