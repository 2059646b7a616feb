"""
CRC32C checksums in the masked form stored by Snappy frames.


WHY MASK?
---------
From the format description: "Checksums are not stored directly, but masked,
as checksumming data and then its own checksum can be problematic."

The masking transform is::

    masked = rotate_right(crc, 15) + 0xA282EAD8   (mod 2^32)

The rotation amount, the additive constant, and the little-endian byte order
of the stored field must match bit-for-bit to interoperate with other
implementations.


CRC32C
------
CRC32C uses the Castagnoli polynomial (0x1EDC6F41), which has better error
detection properties than the IEEE CRC32 polynomial. A 256-entry lookup
table replaces 8 shift/XOR steps per byte with a single table access.
"""

from __future__ import annotations

from .constants import CRC32C_MASK_DELTA, CRC32C_MASK_ROTATION, CRC32C_POLYNOMIAL
from .exceptions import CrcMismatchError

_MASK_32: int = 0xFFFFFFFF


def _crc32c_table() -> list[int]:
    """
    Generate the CRC32C lookup table.

    Returns:
        256-entry lookup table for byte-at-a-time CRC computation.

    Algorithm:
        For each possible byte value (0-255):
          1. Start with the byte value as the CRC.
          2. For each of the 8 bits, shift right and XOR with the
             polynomial when the low bit was set.
          3. Store the final value in the table.
    """
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            if crc & 1:
                crc = (crc >> 1) ^ CRC32C_POLYNOMIAL
            else:
                crc >>= 1
        table.append(crc)
    return table


_CRC32C_TABLE: list[int] = _crc32c_table()


def crc32c(data: bytes | bytearray | memoryview) -> int:
    """
    Compute the standard CRC32C checksum of data.

    Args:
        data: Input bytes.

    Returns:
        32-bit CRC32C checksum.
    """
    table = _CRC32C_TABLE
    crc = _MASK_32

    # index = (crc ^ byte) & 0xFF selects the entry,
    # crc >> 8 carries the remaining bits forward.
    for byte in data:
        crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)

    return crc ^ _MASK_32


def mask_crc(crc: int) -> int:
    """
    Mask a raw CRC32C for storage in a Snappy frame.

    rotate_right(x, 15) is (x >> 15) | (x << 17); the result is reduced to
    32 bits because Python integers are unbounded.
    """
    rotated = ((crc >> CRC32C_MASK_ROTATION) | (crc << (32 - CRC32C_MASK_ROTATION))) & _MASK_32
    return (rotated + CRC32C_MASK_DELTA) & _MASK_32


def unmask_crc(masked: int) -> int:
    """Invert `mask_crc`, recovering the raw CRC32C."""
    rotated = (masked - CRC32C_MASK_DELTA) & _MASK_32
    return ((rotated << CRC32C_MASK_ROTATION) | (rotated >> (32 - CRC32C_MASK_ROTATION))) & _MASK_32


def masked_crc(data: bytes | bytearray | memoryview) -> int:
    """Compute the masked CRC32C of data, as stored in data chunks."""
    return mask_crc(crc32c(data))


def check_crc(expected: int, data: bytes | bytearray | memoryview) -> None:
    """
    Verify a stored masked CRC against the data it covers.

    Args:
        expected: Masked CRC read from the stream.
        data: Uncompressed chunk contents.

    Raises:
        CrcMismatchError: If the computed masked CRC differs.
    """
    actual = masked_crc(data)
    if actual != expected:
        raise CrcMismatchError(expected, actual)
