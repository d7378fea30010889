"""Decode orchestration.

This package provides:
- LogDecoder: dispatches between known-interface and candidate decoding
- decode_log: one-shot convenience wrapper
"""

from logdecode.orchestration.orchestrator import LogDecoder, decode_log

__all__ = [
    "LogDecoder",
    "decode_log",
]
