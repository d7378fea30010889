"""Decoding utilities: topic word parsing and value normalization."""

from __future__ import annotations

from typing import Any

from eth_abi import decode as abi_decode
from eth_utils import to_checksum_address  # type: ignore[attr-defined]

from logdecode.decoding.specs import is_reference_type, split_types


def parse_topic_word(word: bytes, typ: str) -> Any:
    """Decode one indexed topic word according to the declared type.

    Reference types (string, bytes, arrays, tuples) are stored as their keccak
    hash, so the raw word is returned as hex.
    """
    if is_reference_type(typ):
        return "0x" + word.hex()
    (value,) = abi_decode([typ], word)
    return normalize_value(value, typ)


def normalize_value(value: Any, typ: str) -> Any:
    """Make a decoded value presentable: checksummed addresses, hex bytes, lists."""
    if typ.endswith("]"):
        inner = typ[: typ.rfind("[")]
        return [normalize_value(v, inner) for v in value]
    if typ.startswith("("):
        inner_types = split_types(typ[1:-1])
        return [normalize_value(v, t) for v, t in zip(value, inner_types)]
    if typ == "address":
        return to_checksum_address(value)
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return value
