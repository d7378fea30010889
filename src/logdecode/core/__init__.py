"""Core data models, configuration and ports.

This package provides:
- Data models (RawLog, TransactionContext, DecodedArgument, CandidateFragment)
- Result types (Decoded, Unverified, Failed)
- Configuration classes (DecoderConfig, StoreConfig)
- The candidate store port (ICandidateStore)
"""

from logdecode.core.config import DecoderConfig, StoreConfig
from logdecode.core.interfaces import ICandidateStore
from logdecode.core.models import (
    ArgumentMapping,
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

__all__ = [
    "DecoderConfig",
    "StoreConfig",
    "ICandidateStore",
    "ArgumentMapping",
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
]
