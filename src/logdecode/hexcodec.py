"""Conversions between `0x`-prefixed hex text and raw bytes.

Both directions pass `None` through unchanged so optional topics can be
decoded without special-casing at every call site.
"""

from __future__ import annotations

import re
from typing import overload

from logdecode.errors import InvalidHex

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


@overload
def decode_hex(value: None) -> None: ...
@overload
def decode_hex(value: str) -> bytes: ...


def decode_hex(value: str | None) -> bytes | None:
    """Decode hex text into bytes.

    A single leading lowercase `0x` is stripped; digits may be either case.
    Raises `InvalidHex` for odd-length or non-hex input.
    """
    if value is None:
        return None
    digits = value[2:] if value.startswith("0x") else value
    if len(digits) % 2:
        raise InvalidHex(value, "odd number of digits")
    if not _HEX_DIGITS.fullmatch(digits):
        raise InvalidHex(value, "non-hex characters")
    return bytes.fromhex(digits)


@overload
def encode_hex(raw: None) -> None: ...
@overload
def encode_hex(raw: bytes) -> str: ...


def encode_hex(raw: bytes | None) -> str | None:
    """Encode bytes as lowercase `0x`-prefixed hex text."""
    if raw is None:
        return None
    return "0x" + raw.hex()
