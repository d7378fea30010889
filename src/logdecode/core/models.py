"""Core data models for log decoding.

This module defines:
- `RawLog`: the raw log record handed to the decoder (topics + data).
- `TransactionContext`: what is known about the transaction that emitted it.
- `DecodedArgument` / `ArgumentMapping`: typed, ordered decode output.
- `CandidateFragment`: a stored interface fragment keyed by its 4-byte id.
- `Decoded`, `Unverified`, `Failed`: the only result shapes callers receive.

Design notes
------------
- Everything here is immutable; a decode call never mutates its inputs.
- Topics stay as text so malformed values reach the decoder and surface as a
  decode outcome instead of failing at construction time.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, NamedTuple

from logdecode.hexcodec import decode_hex

if TYPE_CHECKING:
    from logdecode.decoding.specs import InterfaceDefinition


# === Raw inputs ===


@dataclass(slots=True, frozen=True)
class RawLog:
    """Raw log as emitted by contract execution, up to four topic words."""

    first_topic: str | None = None
    second_topic: str | None = None
    third_topic: str | None = None
    fourth_topic: str | None = None
    data: bytes = b""
    address: str | None = None  # emitting contract

    @property
    def topics(self) -> tuple[str | None, str | None, str | None, str | None]:
        return (self.first_topic, self.second_topic, self.third_topic, self.fourth_topic)

    @classmethod
    def from_topics(
        cls,
        topics: Sequence[str | None],
        data: bytes = b"",
        *,
        address: str | None = None,
    ) -> RawLog:
        """Build a log from a topic list of length 0 to 4."""
        if len(topics) > 4:
            raise ValueError(f"a log carries at most 4 topics, got {len(topics)}")
        padded = list(topics) + [None] * (4 - len(topics))
        return cls(*padded, data=data, address=address)

    @classmethod
    def from_rpc(cls, entry: Mapping[str, Any]) -> RawLog:
        """Map a JSON-RPC log object (`eth_getLogs` / receipt entry) to a `RawLog`.

        Topic text is kept verbatim and raw topic bytes (web3 `HexBytes`) are
        re-encoded as `0x` hex. Text `data` is hex-decoded and may raise
        `InvalidHex`; raw `data` bytes are used as they are.
        """
        topics = [
            "0x" + bytes(t).hex() if isinstance(t, (bytes, bytearray)) else t
            for t in entry.get("topics", [])
        ]
        data = entry.get("data") or b""
        if not isinstance(data, (bytes, bytearray)):
            data = decode_hex(data)
        return cls.from_topics(topics, bytes(data), address=entry.get("address"))


@dataclass(slots=True, frozen=True)
class TransactionContext:
    """The emitting transaction: its hash, call target and verified ABI (if any)."""

    hash: str | None = None
    target_address: str | None = None
    known_interface: InterfaceDefinition | None = None


# === Decoded output ===


class DecodedArgument(NamedTuple):
    """One decoded parameter, in declaration order."""

    name: str
    type: str
    indexed: bool
    value: Any


ArgumentMapping = tuple[DecodedArgument, ...]


@dataclass(slots=True, frozen=True)
class CandidateFragment:
    """A previously seen interface fragment, keyed by its 4-byte identifier.

    `definition` holds raw ABI entries (usually a single one) so that a
    corrupt stored fragment only disqualifies itself when parsed.
    """

    identifier: bytes
    definition: tuple[Mapping[str, Any], ...] = field(default_factory=tuple)

    def to_json_line(self) -> str:
        """Serialize as a compact JSON line."""
        payload = {"identifier": "0x" + self.identifier.hex(), "abi": list(self.definition)}
        return json.dumps(payload, separators=(",", ":"), sort_keys=True) + "\n"

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> CandidateFragment:
        abi = obj.get("abi") or []
        if isinstance(abi, Mapping):
            abi = [abi]
        return cls(identifier=decode_hex(obj["identifier"]), definition=tuple(abi))


# === Results ===


class FailureReason(str, Enum):
    NO_TARGET = "no_target"
    COULD_NOT_DECODE = "could_not_decode"


@dataclass(slots=True, frozen=True)
class Decoded:
    """Authoritative (or candidate) decode of one log."""

    identifier_hex: str
    signature_text: str
    mapping: ArgumentMapping

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "decoded",
            "identifier": self.identifier_hex,
            "signature": self.signature_text,
            "arguments": [arg._asdict() for arg in self.mapping],
        }


@dataclass(slots=True, frozen=True)
class Unverified:
    """No verified interface: zero or one best-effort guesses."""

    candidates: tuple[Decoded, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "unverified",
            "candidates": [c.to_dict() for c in self.candidates],
        }


@dataclass(slots=True, frozen=True)
class Failed:
    reason: FailureReason

    def to_dict(self) -> dict[str, Any]:
        return {"status": "failed", "reason": self.reason.value}


DecodeResult = Decoded | Unverified | Failed


def describe_result(result: DecodeResult) -> str:
    """Return the one-line, user-facing framing of a decode result."""
    match result:
        case Decoded():
            return result.signature_text
        case Unverified(candidates=(best, *_)):
            return f"contract not verified; best guess: {best.signature_text}"
        case Unverified():
            return "contract not verified; no matching candidate"
        case Failed(reason=FailureReason.NO_TARGET):
            return "could not decode this log: transaction has no contract target"
        case Failed():
            return "could not decode this log"
    raise TypeError(f"unsupported result type: {type(result).__name__}")
