from __future__ import annotations

from .core.config import DecoderConfig, StoreConfig
from .core.models import (
    CandidateFragment,
    Decoded,
    DecodedArgument,
    DecodeResult,
    Failed,
    FailureReason,
    RawLog,
    TransactionContext,
    Unverified,
    describe_result,
)
from .decoding import format_call, make_definition, match_interface, parse_interface
from .errors import CandidateLookupError, InvalidHex, InvalidInterface, LogDecodeError
from .hexcodec import decode_hex, encode_hex
from .orchestration import LogDecoder, decode_log
from .resolution import CandidateResolver, derive_selector_from_topic
from .storage import DuckDBCandidateStore, InMemoryCandidateStore, fragments_from_abi

__all__ = [
    "DecoderConfig",
    "StoreConfig",
    "CandidateFragment",
    "Decoded",
    "DecodedArgument",
    "DecodeResult",
    "Failed",
    "FailureReason",
    "RawLog",
    "TransactionContext",
    "Unverified",
    "describe_result",
    "format_call",
    "make_definition",
    "match_interface",
    "parse_interface",
    "CandidateLookupError",
    "InvalidHex",
    "InvalidInterface",
    "LogDecodeError",
    "decode_hex",
    "encode_hex",
    "LogDecoder",
    "decode_log",
    "CandidateResolver",
    "derive_selector_from_topic",
    "DuckDBCandidateStore",
    "InMemoryCandidateStore",
    "fragments_from_abi",
]
