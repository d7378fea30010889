"""Best-effort decoding for logs whose target has no verified interface.

The resolver derives a 4-byte identifier from the log's first topic, asks a
candidate store for a bounded number of fragments sharing it, and tries each
through the interface matcher until one decodes. Whatever happens, a
successful guess is reported as `Unverified` so callers can present it as a
suggestion rather than a fact.
"""

from __future__ import annotations

import logging

from logdecode.core.config import DEFAULT_DECODER_CONFIG, DecoderConfig
from logdecode.core.interfaces import ICandidateStore
from logdecode.core.models import CandidateFragment, Decoded, Failed, FailureReason, RawLog, Unverified
from logdecode.decoding.abi import parse_interface
from logdecode.decoding.formatter import build_decoded
from logdecode.decoding.matcher import Match, match_interface
from logdecode.errors import CandidateLookupError, InvalidInterface
from logdecode.resolution.selector import derive_selector_from_topic

logger = logging.getLogger(__name__)


class CandidateResolver:
    """Resolve unverified logs against a candidate store.

    Parameters
    ----------
    store : ICandidateStore
        Source of previously recorded fragments.
    config : DecoderConfig
        `candidate_limit` bounds the lookup, `max_candidates` the successes kept.
    logger : logging.Logger
        Diagnostic sink for lookup failures and per-candidate decode faults.
    """

    def __init__(
        self,
        store: ICandidateStore,
        *,
        config: DecoderConfig = DEFAULT_DECODER_CONFIG,
        logger: logging.Logger = logger,
    ) -> None:
        self._store = store
        self._config = config
        self._logger = logger

    def resolve(self, log: RawLog, *, tx_hash: str | None = None) -> Unverified | Failed:
        selector = derive_selector_from_topic(log.first_topic)
        if selector is None:
            return Failed(FailureReason.COULD_NOT_DECODE)

        try:
            fragments = self._store.lookup_by_identifier(selector, limit=self._config.candidate_limit)
        except (CandidateLookupError, TimeoutError) as e:
            self._logger.warning("Candidate lookup for 0x%s failed: %s", selector.hex(), e)
            return Failed(FailureReason.COULD_NOT_DECODE)
        except Exception as e:  # any store failure is a lookup failure
            self._logger.warning(
                "Candidate lookup for 0x%s failed: %s: %s", selector.hex(), type(e).__name__, e
            )
            return Failed(FailureReason.COULD_NOT_DECODE)

        candidates: list[Decoded] = []
        for fragment in list(fragments)[: self._config.candidate_limit]:
            decoded = self._try_fragment(fragment, log, tx_hash)
            if decoded is None:
                continue
            candidates.append(decoded)
            if len(candidates) >= self._config.max_candidates:
                break
        return Unverified(candidates=tuple(candidates))

    def _try_fragment(self, fragment: CandidateFragment, log: RawLog, tx_hash: str | None) -> Decoded | None:
        try:
            definition = parse_interface(fragment.definition)
        except InvalidInterface as e:
            self._logger.debug("Skipping malformed fragment 0x%s: %s", fragment.identifier.hex(), e)
            return None
        result = match_interface(definition, log, tx_hash=tx_hash, logger=self._logger)
        if isinstance(result, Match):
            return build_decoded(result)
        return None
