"""
Wire constants for the Snappy framing format.

Reference: https://github.com/google/snappy/blob/main/framing_format.txt
"""

from __future__ import annotations

from typing import Final

# ===========================================================================
# Chunk Layout
# ===========================================================================
#
# Every chunk starts with a 4-byte header:
#
#   [type: 1 byte][length: 3 bytes LE]
#
# Data chunks then carry a 4-byte masked CRC before their payload.

HEADER_SIZE: Final = 4
"""Size of a chunk header (type byte plus 24-bit length)."""

CRC_SIZE: Final = 4
"""Size of the masked CRC32C stored at the front of data chunks."""

MAX_CHUNK_LENGTH: Final = 0xFFFFFF
"""Largest body length a 24-bit length field can declare."""

MAX_UNCOMPRESSED_CHUNK_SIZE: Final = 65536
"""Maximum uncompressed data per chunk (64 KiB).

The encoder never emits a block larger than this. The decoder tolerates
larger blocks but never needs them for well-formed streams.
"""

# ===========================================================================
# Stream Identifier
# ===========================================================================

STREAM_IDENTIFIER_MAGIC: Final = b"sNaPpY"
"""Body of the stream identifier chunk."""

STREAM_IDENTIFIER: Final = b"\xff\x06\x00\x00" + STREAM_IDENTIFIER_MAGIC
"""Fixed 10-byte chunk written once at the start of every framed stream.

Format: [type=0xff][length=6 as 3-byte LE][magic="sNaPpY"]
"""

# ===========================================================================
# Buffer Sizing
# ===========================================================================

DEFAULT_INPUT_BUFFER_SIZE: Final = 1024 * 1024
"""Initial capacity of the decoder's input buffer (1 MiB).

Large enough to hold many maximum-size chunks, so refills are rare.
"""

# ===========================================================================
# CRC Masking
# ===========================================================================

CRC32C_POLYNOMIAL: Final = 0x82F63B78
"""Castagnoli polynomial in bit-reversed form (0x1EDC6F41 reflected)."""

CRC32C_MASK_DELTA: Final = 0xA282EAD8
"""Constant added after rotating the CRC right by 15 bits."""

CRC32C_MASK_ROTATION: Final = 15
"""Right rotation applied to a raw CRC before the delta is added."""
