"""Exception hierarchy shared by the codec, parsers and candidate stores."""

from __future__ import annotations


class LogDecodeError(Exception):
    """Base class for every error raised by logdecode."""


class InvalidHex(LogDecodeError, ValueError):
    """Raised when a value is not valid `0x`-prefixed (or bare) hex text."""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(f"invalid hex {value!r}: {reason}")
        self.value = value
        self.reason = reason


class InvalidInterface(LogDecodeError, ValueError):
    """Raised when an ABI document or signature string cannot be parsed."""


class CandidateLookupError(LogDecodeError):
    """Raised by a candidate store when a lookup cannot be served."""
