"""
Chunk parsing on top of a `Buffer`.

A framed stream is a sequence of chunks laid back-to-back::

    [type: 1 byte][length: 3 bytes LE][body: length bytes]

The length field does NOT include the 4-byte header itself.


CHUNK TYPES
-----------
  0x00:        Compressed data     [masked_crc32c: 4][snappy block]
  0x01:        Uncompressed data   [masked_crc32c: 4][raw bytes]
  0x02-0x7f:   Reserved unskippable
  0x80-0xfd:   Reserved skippable
  0xfe:        Padding
  0xff:        Stream identifier   "sNaPpY"


PARTIAL READS
-------------
Sources may return any number of bytes per call. The reader keeps pulling
into the buffer until either the chunk is complete or the source returns
nothing. An empty buffer at that point is a clean end of stream; a partial
chunk is an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Literal

from .buffer import Buffer
from .constants import CRC_SIZE, HEADER_SIZE
from .exceptions import ChunkTooLargeError, CrcTruncatedError, IncompleteChunkError
from .protocols import ByteSource

logger = logging.getLogger(__name__)


class ChunkType(IntEnum):
    """Chunk type bytes with a fixed meaning."""

    COMPRESSED = 0x00
    UNCOMPRESSED = 0x01
    PADDING = 0xFE
    STREAM_IDENTIFIER = 0xFF


RESERVED_UNSKIPPABLE = range(0x02, 0x80)
"""Types reserved for future use that a decoder must understand."""

RESERVED_SKIPPABLE = range(0x80, 0xFE)
"""Types reserved for future use that a decoder may ignore."""


@dataclass(frozen=True, slots=True)
class Chunk:
    """
    One framed chunk, viewed in place inside the input buffer.

    The data view is only valid until the next call on the reader that
    produced it.
    """

    chunk_type: int
    """Type byte from the chunk header."""

    data: memoryview
    """Chunk body (everything after the header)."""

    def crc(self, byte_order: Literal["little", "big"] = "little") -> int:
        """
        Read the masked CRC stored at the front of a data chunk.

        Raises:
            CrcTruncatedError: If the body is shorter than the CRC field.
        """
        if len(self.data) < CRC_SIZE:
            raise CrcTruncatedError(
                f"Snappy CRC truncated: chunk body has {len(self.data)} bytes"
            )
        return int.from_bytes(self.data[:CRC_SIZE], byte_order)

    @property
    def payload(self) -> memoryview:
        """Data chunk contents following the CRC."""
        return self.data[CRC_SIZE:]


class ChunkReader:
    """Turns a byte source into a sequence of `Chunk` views."""

    def __init__(
        self,
        source: ByteSource,
        buffer: Buffer,
        max_chunk_length: int | None = None,
    ) -> None:
        """
        Args:
            source: Where stream bytes come from.
            buffer: Input buffer; its capacity sets the read size.
            max_chunk_length: Reject headers declaring a larger body.
                None accepts anything the 24-bit length field can express.
        """
        self.source = source
        self.buffer = buffer
        self.max_chunk_length = max_chunk_length

    def ensure_buffered(self, count: int) -> memoryview | None:
        """
        Make sure `count` bytes are buffered, then consume them.

        Args:
            count: Number of bytes required.

        Returns:
            A view of the next `count` bytes, or None if the source had no
            data at all (clean end of stream).

        Raises:
            IncompleteChunkError: If the source ended after delivering some,
                but not all, of the bytes.
        """
        buffer = self.buffer

        if buffer.buffered < count:
            # Growing only happens for chunks larger than the whole buffer,
            # which well-formed streams never produce.
            capacity = buffer.capacity
            if count > capacity:
                logger.warning("Snappy chunk of %d bytes required growing buffer", count)
                buffer.add_capacity(count - capacity)

            # Make the free tail as large as possible, then fill it.
            buffer.move_data_to_start()
            self._fill()

            if buffer.empty:
                return None
            if buffer.buffered < count:
                raise IncompleteChunkError(count, buffer.buffered)

        return buffer.consume(count)

    def next_chunk(self) -> Chunk | None:
        """
        Read the next chunk from the stream.

        Returns:
            The next chunk, or None at a clean end of stream.

        Raises:
            IncompleteChunkError: If the header or body is truncated.
            ChunkTooLargeError: If the declared length exceeds the limit.
        """
        # Step 1: Header. Running out of data here ends the stream cleanly.
        header = self.ensure_buffered(HEADER_SIZE)
        if header is None:
            return None

        # Step 2: Parse [type: 1][length: 3 LE].
        chunk_type = header[0]
        length = header[1] | header[2] << 8 | header[3] << 16

        if self.max_chunk_length is not None and length > self.max_chunk_length:
            raise ChunkTooLargeError(length, self.max_chunk_length)

        # Step 3: Body. The header promised these bytes, so any end of
        # stream before they arrive is a truncated chunk.
        data = self.ensure_buffered(length)
        if data is None:
            raise IncompleteChunkError(length, 0)

        return Chunk(chunk_type, data)

    def _fill(self) -> None:
        """Read from the source until the free tail is full or no data arrives."""
        buffer = self.buffer
        while True:
            with buffer.space_to_fill() as space:
                if not space:
                    return
                bytes_read = self.source.readinto(space)
            if not bytes_read:
                return
            buffer.added(bytes_read)
