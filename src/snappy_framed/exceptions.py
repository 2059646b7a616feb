"""Exception hierarchy for the Snappy framing format."""

from __future__ import annotations


class FramingError(Exception):
    """
    Base exception for all framing errors.

    Every framing error is fatal to the stream that raised it. The decoder
    does not resynchronize, so the instance must be discarded.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class IncompleteChunkError(FramingError):
    """
    Raised when a chunk header or body is cut short by the end of the source.

    Attributes:
        expected: Number of bytes the chunk required.
        available: Number of bytes the source actually delivered.
    """

    def __init__(self, expected: int, available: int) -> None:
        self.expected = expected
        self.available = available
        super().__init__(f"Incomplete Snappy chunk: need {expected} bytes, have {available}")


class CrcTruncatedError(FramingError):
    """Raised when a data chunk body is too short to hold its CRC."""


class CrcMismatchError(FramingError):
    """
    Raised when a stored checksum does not match the chunk contents.

    Attributes:
        expected: Masked CRC stored in the stream.
        actual: Masked CRC computed over the uncompressed data.
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid Snappy CRC (expected {expected:#010x}, got {actual:#010x})")


class DecompressionError(FramingError):
    """Raised when the block decompressor rejects a compressed payload."""


class ChunkTooLargeError(FramingError):
    """
    Raised when a chunk header declares more body bytes than allowed.

    Attributes:
        length: Body length declared by the header.
        limit: Configured maximum body length.
    """

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"Snappy chunk of {length} bytes exceeds limit of {limit} bytes")


class UnskippableChunkError(FramingError):
    """
    Raised in strict mode for a reserved unskippable chunk (0x02-0x7f).

    Attributes:
        chunk_type: The offending chunk type byte.
    """

    def __init__(self, chunk_type: int) -> None:
        self.chunk_type = chunk_type
        super().__init__(f"Unknown unskippable chunk type: {chunk_type:#04x}")
