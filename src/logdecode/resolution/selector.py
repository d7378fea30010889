"""Derive a 4-byte lookup identifier from a log's first topic.

This is a lossy heuristic, kept apart from the hex codec on purpose: the
first topic of an event log is a 32-byte signature hash, yet candidate
fragments are keyed by 4-byte selectors. The topic is read as an unsigned
integer, re-encoded in its minimal big-endian form and truncated to its
leading 4 bytes. A topic with leading zero bytes therefore yields bytes from
further inside the word, and different signatures can collide.
"""

from __future__ import annotations

import re

SELECTOR_SIZE = 4

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


def minimal_big_endian(number: int) -> bytes:
    """Encode a non-negative int without leading zero bytes (0 → b"\\x00")."""
    return number.to_bytes(max(1, (number.bit_length() + 7) // 8), "big")


def derive_selector_from_topic(topic: str | None) -> bytes | None:
    """Return the leading 4 bytes of the topic's minimal encoding, or None.

    None is returned when the topic is missing, lacks the `0x` prefix, carries
    non-hex digits, or has fewer than 4 significant bytes.
    """
    if topic is None or not topic.startswith("0x"):
        return None
    digits = topic[2:]
    if not _HEX_DIGITS.fullmatch(digits):
        return None
    raw = minimal_big_endian(int(digits, 16))
    if len(raw) < SELECTOR_SIZE:
        return None
    return raw[:SELECTOR_SIZE]
