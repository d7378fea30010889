from collections.abc import Sequence
from typing import Any

import pytest
from eth_abi import encode
from eth_utils import to_checksum_address

from logdecode.core.config import DecoderConfig
from logdecode.core.models import CandidateFragment, Decoded, DecodedArgument, Failed, FailureReason, RawLog, Unverified
from logdecode.errors import CandidateLookupError
from logdecode.resolution import resolver as resolver_module
from logdecode.resolution.resolver import CandidateResolver
from logdecode.resolution.selector import derive_selector_from_topic
from logdecode.storage.candidates import InMemoryCandidateStore

from .conftest import BOB, TRANSFER_SELECTOR, TRANSFER_TOPIC

SELECTOR = bytes.fromhex(TRANSFER_SELECTOR)


def function_fragment(name: str, *inputs: tuple[str, str], identifier: bytes = SELECTOR) -> CandidateFragment:
    entry = {"type": "function", "name": name, "inputs": [{"name": n, "type": t} for n, t in inputs]}
    return CandidateFragment(identifier=identifier, definition=(entry,))


class RecordingStore:
    """Store double that remembers every lookup."""

    def __init__(self, fragments: Sequence[CandidateFragment] = (), error: Exception | None = None) -> None:
        self.fragments = list(fragments)
        self.error = error
        self.calls: list[tuple[bytes, int]] = []

    def lookup_by_identifier(self, identifier: bytes, *, limit: int) -> list[CandidateFragment]:
        self.calls.append((identifier, limit))
        if self.error is not None:
            raise self.error
        return self.fragments


# ---------- selector heuristic ----------


def test_selector_from_selector_prefixed_topic() -> None:
    assert derive_selector_from_topic("0x" + TRANSFER_SELECTOR + "0" * 56) == SELECTOR


def test_selector_from_event_topic_is_truncated_hash() -> None:
    assert derive_selector_from_topic(TRANSFER_TOPIC) == bytes.fromhex("ddf252ad")


def test_selector_skips_leading_zero_bytes() -> None:
    topic = "0x00" + "11223344" + "55" * 27
    assert derive_selector_from_topic(topic) == bytes.fromhex("11223344")


@pytest.mark.parametrize("topic", [None, "", "0x", "ddf252ad" + "0" * 56, "0X" + "ab" * 32, "0xzz", "0x010203", "0x-1"])
def test_selector_rejects_unusable_topics(topic: str | None) -> None:
    assert derive_selector_from_topic(topic) is None


# ---------- resolver ----------


@pytest.fixture
def call_log() -> RawLog:
    return RawLog(
        first_topic="0x" + TRANSFER_SELECTOR + "0" * 56,
        data=encode(["address", "uint256"], [BOB, 1000]),
    )


def test_resolve_selector_prefixed_transfer(call_log: RawLog) -> None:
    store = InMemoryCandidateStore([function_fragment("transfer", ("to", "address"), ("value", "uint256"))])

    result = CandidateResolver(store).resolve(call_log)

    assert result == Unverified(
        candidates=(
            Decoded(
                identifier_hex=TRANSFER_SELECTOR,
                signature_text="transfer(address to, uint256 value)",
                mapping=(
                    DecodedArgument("to", "address", False, to_checksum_address(BOB)),
                    DecodedArgument("value", "uint256", False, 1000),
                ),
            ),
        )
    )


def test_resolve_stops_at_first_success(call_log: RawLog, monkeypatch: pytest.MonkeyPatch) -> None:
    store = RecordingStore([
        function_fragment("transferFrom", ("from", "address"), ("to", "address"), ("value", "uint256")),
        function_fragment("transfer", ("to", "address"), ("value", "uint256")),
        function_fragment("transfer", ("recipient", "address"), ("amount", "uint256")),
    ])
    attempted: list[str] = []
    real_match = resolver_module.match_interface

    def spy(definition: Any, log: RawLog, **kwargs: Any) -> Any:
        attempted.append(definition[0].name)
        return real_match(definition, log, **kwargs)

    monkeypatch.setattr(resolver_module, "match_interface", spy)

    result = CandidateResolver(store).resolve(call_log)

    assert attempted == ["transferFrom", "transfer"]
    assert isinstance(result, Unverified)
    assert len(result.candidates) == 1
    assert [a.name for a in result.candidates[0].mapping] == ["to", "value"]


def test_resolve_asks_store_for_three_fragments(call_log: RawLog) -> None:
    store = RecordingStore()
    CandidateResolver(store).resolve(call_log)
    assert store.calls == [(SELECTOR, 3)]


def test_resolve_ignores_fragments_beyond_limit(call_log: RawLog) -> None:
    bad = function_fragment("transfer", ("to", "address"))  # wrong selector, never matches
    good = function_fragment("transfer", ("to", "address"), ("value", "uint256"))
    store = RecordingStore([bad, bad, bad, good])

    result = CandidateResolver(store, config=DecoderConfig(candidate_limit=3)).resolve(call_log)

    assert result == Unverified()


def test_resolve_with_no_decodable_candidate(call_log: RawLog) -> None:
    store = InMemoryCandidateStore([
        function_fragment("transfer", ("to", "address"), ("value", "uint256"), ("memo", "string")),
    ])
    assert CandidateResolver(store).resolve(call_log) == Unverified(candidates=())


def test_resolve_with_empty_store(call_log: RawLog) -> None:
    assert CandidateResolver(InMemoryCandidateStore()).resolve(call_log) == Unverified()


def test_malformed_fragment_only_disqualifies_itself(call_log: RawLog) -> None:
    broken = CandidateFragment(identifier=SELECTOR, definition=({"type": "function", "name": "x", "inputs": [{}]},))
    good = function_fragment("transfer", ("to", "address"), ("value", "uint256"))

    result = CandidateResolver(RecordingStore([broken, good])).resolve(call_log)

    assert isinstance(result, Unverified)
    assert [c.signature_text for c in result.candidates] == ["transfer(address to, uint256 value)"]


@pytest.mark.parametrize("topic", [None, "0xzz", "ddf252ad" + "0" * 56])
def test_resolve_malformed_first_topic(topic: str | None) -> None:
    store = RecordingStore()
    result = CandidateResolver(store).resolve(RawLog(first_topic=topic))
    assert result == Failed(FailureReason.COULD_NOT_DECODE)
    assert store.calls == []


@pytest.mark.parametrize(
    "error",
    [
        CandidateLookupError("db down"),
        TimeoutError("slow"),
        ConnectionError("store unreachable"),
        OSError("disk gone"),
        RuntimeError("driver bug"),
    ],
)
def test_lookup_failure_is_could_not_decode(
    call_log: RawLog, error: Exception, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level("WARNING"):
        result = CandidateResolver(RecordingStore(error=error)).resolve(call_log)

    assert result == Failed(FailureReason.COULD_NOT_DECODE)
    assert len(caplog.records) == 1
    assert str(error) in caplog.text


def test_malformed_topic_skips_candidate_without_aborting(call_log: RawLog) -> None:
    log = RawLog(first_topic=call_log.first_topic, second_topic="0xnothex", data=call_log.data)
    store = InMemoryCandidateStore([function_fragment("transfer", ("to", "address"), ("value", "uint256"))])

    assert CandidateResolver(store).resolve(log) == Unverified()


def test_max_candidates_can_be_raised(call_log: RawLog) -> None:
    store = RecordingStore([
        function_fragment("transfer", ("to", "address"), ("value", "uint256")),
        function_fragment("transfer", ("recipient", "address"), ("amount", "uint256")),
    ])

    result = CandidateResolver(store, config=DecoderConfig(max_candidates=2)).resolve(call_log)

    assert isinstance(result, Unverified)
    assert len(result.candidates) == 2
