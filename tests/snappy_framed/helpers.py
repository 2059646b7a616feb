"""Sources, sinks and stream builders shared by the framing tests."""

from __future__ import annotations

import random

from snappy_framed.constants import HEADER_SIZE
from snappy_framed.exceptions import DecompressionError
from snappy_framed.masked_crc import masked_crc


class DribbleReader:
    """Source that hands out at most `step` bytes per `readinto` call."""

    def __init__(self, data: bytes, step: int = 1) -> None:
        self._data = data
        self._pos = 0
        self.step = step
        self.calls = 0

    def readinto(self, buffer: memoryview) -> int:
        self.calls += 1
        count = min(self.step, len(buffer), len(self._data) - self._pos)
        buffer[:count] = self._data[self._pos : self._pos + count]
        self._pos += count
        return count


class RandomReader:
    """Source that hands out a random number of bytes per call."""

    def __init__(self, data: bytes, seed: int, max_step: int = 97) -> None:
        self._data = data
        self._pos = 0
        self._rng = random.Random(seed)
        self._max_step = max_step

    def readinto(self, buffer: memoryview) -> int:
        step = self._rng.randint(1, self._max_step)
        count = min(step, len(buffer), len(self._data) - self._pos)
        buffer[:count] = self._data[self._pos : self._pos + count]
        self._pos += count
        return count


class RecordingSink:
    """Sink that keeps every write and counts flushes."""

    def __init__(self) -> None:
        self.writes: list[bytes] = []
        self.flushes = 0

    def write(self, data: bytes | memoryview) -> int:
        self.writes.append(bytes(data))
        return len(data)

    def flush(self) -> None:
        self.flushes += 1

    def getvalue(self) -> bytes:
        return b"".join(self.writes)


class ShortWriteSink(RecordingSink):
    """Sink that accepts at most `limit` bytes per write call."""

    def __init__(self, limit: int) -> None:
        super().__init__()
        self.limit = limit

    def write(self, data: bytes | memoryview) -> int:
        return super().write(bytes(data[: self.limit]))


class FailingSink:
    """Sink whose writes always fail."""

    def write(self, data: bytes | memoryview) -> int:
        raise OSError("disk full")

    def flush(self) -> None:
        pass


class RejectingCodec:
    """Block codec that refuses to decompress anything."""

    def compress(self, data: bytes) -> bytes:
        return bytes(data)

    def decompress(self, data: bytes) -> bytes:
        raise DecompressionError("rejected")


class IdentityCodec:
    """Block codec that stores blocks verbatim."""

    def compress(self, data: bytes) -> bytes:
        return bytes(data)

    def decompress(self, data: bytes) -> bytes:
        return bytes(data)


def make_chunk(chunk_type: int, body: bytes) -> bytes:
    """Build a raw chunk: [type: 1][length: 3 LE][body]."""
    return bytes([chunk_type]) + len(body).to_bytes(3, "little") + body


def make_uncompressed_chunk(payload: bytes, crc: int | None = None) -> bytes:
    """Build an uncompressed data chunk with a correct (or given) masked CRC."""
    if crc is None:
        crc = masked_crc(payload)
    return make_chunk(0x01, crc.to_bytes(4, "little") + payload)


def chunk_boundaries(stream: bytes) -> list[int]:
    """Offsets in `stream` where a chunk starts or the stream ends."""
    boundaries = [0]
    pos = 0
    while pos < len(stream):
        length = int.from_bytes(stream[pos + 1 : pos + HEADER_SIZE], "little")
        pos += HEADER_SIZE + length
        boundaries.append(pos)
    return boundaries


def split_chunks(stream: bytes) -> list[bytes]:
    """Split a well-formed stream into its raw chunks."""
    bounds = chunk_boundaries(stream)
    return [stream[start:end] for start, end in zip(bounds, bounds[1:])]


def incompressible(size: int, seed: int = 0) -> bytes:
    """Deterministic bytes that Snappy cannot shrink."""
    return random.Random(seed).randbytes(size)

