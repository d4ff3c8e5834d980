"""Unit tests for hex quantity and address helpers."""

from __future__ import annotations

import pytest

from nodecall.hexutil import (
    format_units,
    from_hex,
    is_address,
    is_hash32,
    to_checksum_address,
    to_hex,
)


class TestQuantities:
    def test_to_hex(self) -> None:
        assert to_hex(0) == "0x0"
        assert to_hex(16) == "0x10"

    def test_to_hex_rejects_negative(self) -> None:
        with pytest.raises(ValueError):
            to_hex(-1)

    def test_to_hex_rejects_bool(self) -> None:
        with pytest.raises(TypeError):
            to_hex(True)

    def test_from_hex(self) -> None:
        assert from_hex("0x10") == 16
        assert from_hex("0X1f") == 31
        assert from_hex("0x") == 0

    @pytest.mark.parametrize("value", ["10", "0xzz", None, 16, "0x-10", "0x1_0", "0x 1", "0x10\n", "-0x10"])
    def test_from_hex_rejects(self, value) -> None:
        with pytest.raises(ValueError):
            from_hex(value)


class TestAddresses:
    # Test vectors from EIP-55
    @pytest.mark.parametrize(
        "checksummed",
        [
            "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
            "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
            "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
            "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
        ],
    )
    def test_checksum_vectors(self, checksummed: str) -> None:
        assert to_checksum_address(checksummed.lower()) == checksummed
        assert to_checksum_address("0x" + checksummed[2:].upper()) == checksummed

    def test_is_address(self) -> None:
        assert is_address("0x" + "a" * 40)
        assert not is_address("0x" + "a" * 39)
        assert not is_address("a" * 40)
        assert not is_address("0x" + "g" * 40)

    def test_checksum_rejects_invalid(self) -> None:
        with pytest.raises(ValueError):
            to_checksum_address("0x1234")

    def test_is_hash32(self) -> None:
        assert is_hash32("0x" + "ab" * 32)
        assert not is_hash32("0x" + "ab" * 20)


class TestFormatUnits:
    def test_whole_ether(self) -> None:
        assert format_units(10**18) == "1"

    def test_fraction(self) -> None:
        assert format_units(1_500_000_000_000_000_000) == "1.5"

    def test_small(self) -> None:
        assert format_units(1, 18) == "0.000000000000000001"

    def test_zero(self) -> None:
        assert format_units(0) == "0"

    def test_gwei(self) -> None:
        assert format_units(2_500_000_000, 9) == "2.5"
