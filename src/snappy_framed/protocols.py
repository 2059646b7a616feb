"""
Abstract interfaces for the collaborators of the framing layer.

The encoder and decoder never touch files, sockets or the compression
algorithm directly. Anything matching these Protocols can be plugged in:
`io.BytesIO`, files opened in binary mode, `socket.makefile("rb")`, or a
custom block codec in tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteSource(Protocol):
    """A blocking source of bytes, like a file opened with mode "rb"."""

    def readinto(self, buffer: memoryview, /) -> int | None:
        """
        Read some bytes into `buffer`.

        Returns:
            Number of bytes stored. 0 (or None) means no data is available
            right now, either temporarily or because the source ended.
        """
        ...


@runtime_checkable
class ByteSink(Protocol):
    """A blocking byte sink, like a file opened with mode "wb"."""

    def write(self, data: bytes | memoryview, /) -> int | None:
        """Write some or all of `data`, returning the count written."""
        ...

    def flush(self) -> None:
        """Push any buffered bytes to the underlying transport."""
        ...


@runtime_checkable
class BlockCodec(Protocol):
    """
    A raw (unframed) block compressor.

    Each compressed block must be self-delimiting: `decompress` recovers the
    exact input of `compress` without any side channel for its length.
    """

    def compress(self, data: bytes) -> bytes:
        """Compress one block."""
        ...

    def decompress(self, data: bytes) -> bytes:
        """
        Decompress one block.

        Raises:
            DecompressionError: If the block is malformed.
        """
        ...
