"""Match a raw log against one interface definition.

`match_interface` walks the descriptors of a definition in order and returns
the first one whose identifier, indexed/non-indexed split and payload layout
decode cleanly. Malformed input never raises: every fault becomes a `NoMatch`
carrying a `NoMatchReason`, and one warning naming the transaction is logged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from eth_abi import decode as abi_decode
from eth_abi import is_encodable_type
from eth_abi.exceptions import DecodingError

from logdecode.core.models import ArgumentMapping, DecodedArgument, RawLog
from logdecode.decoding.specs import InterfaceDescriptor
from logdecode.decoding.utils import normalize_value, parse_topic_word
from logdecode.errors import InvalidHex
from logdecode.hexcodec import decode_hex

logger = logging.getLogger(__name__)

WORD_SIZE = 32


# ---------- match outcome ----------


class NoMatchReason(str, Enum):
    INVALID_HEX = "invalid_hex"
    MISSING_TOPIC = "missing_topic"
    UNKNOWN_IDENTIFIER = "unknown_identifier"
    ARITY_MISMATCH = "arity_mismatch"
    UNSUPPORTED_TYPE = "unsupported_type"
    BAD_PAYLOAD = "bad_payload"


@dataclass(frozen=True, slots=True)
class Match:
    descriptor: InterfaceDescriptor
    mapping: ArgumentMapping


@dataclass(frozen=True, slots=True)
class NoMatch:
    reason: NoMatchReason
    detail: str = ""

    @property
    def is_fault(self) -> bool:
        """False when the log simply belongs to none of the descriptors."""
        return self.reason not in (NoMatchReason.UNKNOWN_IDENTIFIER, NoMatchReason.MISSING_TOPIC)


MatchResult = Match | NoMatch


# ---------- helper functions ----------


def _identifier_matches(descriptor: InterfaceDescriptor, first_topic: bytes) -> bool:
    """Functions match on the 4-byte selector prefix, events on the full topic hash."""
    if descriptor.kind == "function":
        return first_topic[:4] == descriptor.identifier
    if descriptor.anonymous:
        return False  # no signature word to match against
    return first_topic == descriptor.identifier


def _decode_with(descriptor: InterfaceDescriptor, topic_words: list[bytes], data: bytes) -> MatchResult:
    """Decode topics + data against one descriptor whose identifier already matched."""
    indexed = descriptor.indexed_parameters
    if len(topic_words) != len(indexed):
        return NoMatch(
            NoMatchReason.ARITY_MISMATCH,
            f"{descriptor.name}: {len(indexed)} indexed parameters, {len(topic_words)} topics",
        )

    unsupported = [p.type for p in descriptor.parameters if not is_encodable_type(p.type)]
    if unsupported:
        return NoMatch(NoMatchReason.UNSUPPORTED_TYPE, f"{descriptor.name}: {', '.join(unsupported)}")

    if any(len(w) != WORD_SIZE for w in topic_words):
        return NoMatch(NoMatchReason.BAD_PAYLOAD, f"{descriptor.name}: topic is not a 32-byte word")

    data_params = descriptor.data_parameters
    try:
        data_values = abi_decode([p.type for p in data_params], data)
        topic_values = [parse_topic_word(w, p.type) for p, w in zip(indexed, topic_words)]
    except (DecodingError, ValueError, OverflowError) as e:
        return NoMatch(NoMatchReason.BAD_PAYLOAD, f"{descriptor.name}: {type(e).__name__}: {e}")

    # Re-interleave in declaration order
    indexed_iter = iter(topic_values)
    data_iter = iter(normalize_value(v, p.type) for v, p in zip(data_values, data_params))
    mapping = tuple(
        DecodedArgument(p.name, p.type, p.indexed, next(indexed_iter) if p.indexed else next(data_iter))
        for p in descriptor.parameters
    )
    return Match(descriptor, mapping)


# ---------- main matcher ----------


def match_interface(
    definition: Iterable[InterfaceDescriptor],
    log: RawLog,
    *,
    tx_hash: str | None = None,
    logger: logging.Logger = logger,
) -> MatchResult:
    """Find the descriptor consistent with `log` and decode its arguments.

    Returns `Match` on success. Otherwise returns `NoMatch`:
    - `INVALID_HEX` / `MISSING_TOPIC` when topics cannot be read;
    - `UNKNOWN_IDENTIFIER` when no descriptor carries the log's identifier;
    - the last decode fault seen when identifiers matched but decoding failed.
    """
    try:
        first, *rest = (decode_hex(t) for t in log.topics)
    except InvalidHex as e:
        outcome = NoMatch(NoMatchReason.INVALID_HEX, str(e))
        _warn(logger, tx_hash, outcome)
        return outcome

    if first is None:
        return NoMatch(NoMatchReason.MISSING_TOPIC)

    topic_words = [w for w in rest if w is not None]
    outcome = NoMatch(NoMatchReason.UNKNOWN_IDENTIFIER)
    for descriptor in definition:
        if not _identifier_matches(descriptor, first):
            continue
        result = _decode_with(descriptor, topic_words, log.data)
        if isinstance(result, Match):
            return result
        outcome = result

    if outcome.is_fault:
        _warn(logger, tx_hash, outcome)
    return outcome


def _warn(log: logging.Logger, tx_hash: str | None, outcome: NoMatch) -> None:
    log.warning(
        "Could not decode input data for log from transaction: %s (%s: %s)",
        tx_hash or "<unknown>",
        outcome.reason.value,
        outcome.detail,
    )
