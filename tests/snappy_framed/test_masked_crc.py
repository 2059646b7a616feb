"""Tests for CRC32C and the Snappy checksum mask."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from snappy_framed import CrcMismatchError
from snappy_framed.constants import CRC32C_MASK_DELTA
from snappy_framed.masked_crc import check_crc, crc32c, mask_crc, masked_crc, unmask_crc


class TestCRC32C:
    """Tests for the raw Castagnoli checksum."""

    def test_rfc3720_vectors(self) -> None:
        """CRC32C matches the iSCSI test vectors."""
        assert crc32c(b"123456789") == 0xE3069283
        assert crc32c(b"\x00" * 32) == 0x8A9136AA
        assert crc32c(b"\xff" * 32) == 0x62A8AB43
        assert crc32c(bytes(range(32))) == 0x46DD794E

    def test_empty_input(self) -> None:
        """The checksum of nothing is zero."""
        assert crc32c(b"") == 0

    def test_castagnoli_polynomial(self) -> None:
        """A single byte exposes the polynomial in use."""
        assert crc32c(b"\x01") == 0xA016D052

    def test_accepts_buffer_types(self) -> None:
        """bytes, bytearray and memoryview give the same checksum."""
        data = b"framed snappy"
        assert crc32c(data) == crc32c(bytearray(data)) == crc32c(memoryview(data))


class TestMask:
    """Tests for the rotate-and-add masking transform."""

    def test_mask_formula(self) -> None:
        """Masking is rotate_right(x, 15) + 0xa282ead8 modulo 2^32."""
        crc = 0x12345678
        expected = (((crc >> 15) | (crc << 17)) + CRC32C_MASK_DELTA) & 0xFFFFFFFF
        assert mask_crc(crc) == expected

    def test_mask_of_zero(self) -> None:
        """Zero rotates to zero, leaving only the delta."""
        assert mask_crc(0) == CRC32C_MASK_DELTA

    def test_masked_check_value(self) -> None:
        """The masked form of the standard check value."""
        assert masked_crc(b"123456789") == 0xC78AB0E5

    def test_interop_vector(self) -> None:
        """Matches the value produced by the Java and C++ framing tools."""
        assert masked_crc(b"aaaaaaaaaaaabbbbbbbaaaaaa") == 0x9274CDA8

    def test_masked_vectors_compose(self) -> None:
        """masked_crc is mask_crc applied to crc32c."""
        assert masked_crc(b"\x00" * 32) == mask_crc(0x8A9136AA)
        assert masked_crc(b"\xff" * 32) == mask_crc(0x62A8AB43)

    @given(st.integers(min_value=0, max_value=0xFFFFFFFF))
    def test_unmask_inverts_mask(self, crc: int) -> None:
        """unmask_crc recovers the raw CRC for every 32-bit value."""
        masked = mask_crc(crc)
        assert 0 <= masked <= 0xFFFFFFFF
        assert unmask_crc(masked) == crc

    @given(st.binary(max_size=256))
    def test_pure_function(self, data: bytes) -> None:
        """Repeated calls give the same answer."""
        assert masked_crc(data) == masked_crc(data)
        assert unmask_crc(masked_crc(data)) == crc32c(data)


class TestCheckCrc:
    """Tests for stored checksum verification."""

    def test_matching_crc_passes(self) -> None:
        """A correct masked CRC is accepted."""
        data = b"payload"
        check_crc(masked_crc(data), data)

    def test_mismatch_raises(self) -> None:
        """A wrong CRC raises with both values attached."""
        data = b"payload"
        actual = masked_crc(data)
        expected = actual ^ 1
        with pytest.raises(CrcMismatchError, match="Invalid Snappy CRC") as exc_info:
            check_crc(expected, data)
        assert exc_info.value.expected == expected
        assert exc_info.value.actual == actual
