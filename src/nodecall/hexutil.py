"""Hex quantity and address helpers for Ethereum JSON-RPC values."""

from __future__ import annotations

import re
from decimal import Decimal

from eth_hash.auto import keccak

_ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")
_HASH32_RE = re.compile(r"0x[0-9a-fA-F]{64}")
_QUANTITY_RE = re.compile(r"0[xX][0-9a-fA-F]*")


def to_hex(value: int) -> str:
    """Encode a non-negative integer as a JSON-RPC quantity."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Quantity must be int, got {type(value).__name__}")
    if value < 0:
        raise ValueError("Quantity must not be negative")
    return hex(value)


def from_hex(value: str) -> int:
    """
    Decode a 0x-prefixed quantity.

    ``"0x"`` decodes to 0, which some nodes return for empty values.
    """
    if not isinstance(value, str) or not _QUANTITY_RE.fullmatch(value):
        raise ValueError(f"Not a hex quantity: {value!r}")
    digits = value[2:]
    if not digits:
        return 0
    return int(digits, 16)


def is_address(value: str) -> bool:
    return isinstance(value, str) and bool(_ADDRESS_RE.fullmatch(value))


def is_hash32(value: str) -> bool:
    return isinstance(value, str) and bool(_HASH32_RE.fullmatch(value))


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format."""
    if not is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    addr = address[2:].lower()
    # Keccak-256, not NIST SHA3-256
    addr_hash = keccak(addr.encode("ascii")).hex()
    return "0x" + "".join(
        c.upper() if c in "abcdef" and int(addr_hash[i], 16) >= 8 else c
        for i, c in enumerate(addr)
    )


def format_units(value: int, decimals: int = 18) -> str:
    """Render an integer amount of base units as a decimal string."""
    if decimals < 0:
        raise ValueError("decimals must not be negative")
    scaled = Decimal(value).scaleb(-decimals)
    text = format(scaled, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
