"""
Runtime configuration for framed streams.

The defaults reproduce the classic behavior of the format: little-endian
checksums, every block stored compressed, and reserved chunks skipped.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .constants import DEFAULT_INPUT_BUFFER_SIZE, MAX_CHUNK_LENGTH


class StrictBaseModel(BaseModel):
    """A strict, immutable pydantic base model."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        strict=True,
        validate_default=True,
    )


class FramingConfig(StrictBaseModel):
    """Tunables shared by the framed encoder and decoder."""

    input_buffer_size: int = Field(default=DEFAULT_INPUT_BUFFER_SIZE, gt=0)
    """Initial capacity of the decoder input buffer."""

    max_chunk_length: Annotated[int, Field(gt=0, le=MAX_CHUNK_LENGTH)] | None = None
    """Largest chunk body the decoder accepts.

    Declared lengths are untrusted input. Without a limit, a corrupt header
    can force the input buffer to grow up to the 24-bit maximum.
    """

    reject_unskippable_chunks: bool = False
    """Fail on reserved unskippable chunks (0x02-0x7f) instead of skipping them."""

    crc_byte_order: Literal["little", "big"] = "little"
    """Byte order of the stored checksum field.

    The format stores checksums little-endian. A few implementations write
    them big-endian; select "big" to interoperate with those.
    """

    emit_uncompressed_chunks: bool = False
    """Store blocks raw (type 0x01) when compression does not shrink them."""


DEFAULT_CONFIG = FramingConfig()
"""Configuration used when callers do not supply one."""
