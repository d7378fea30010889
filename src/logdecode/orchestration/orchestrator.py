"""Top-level decode entry point.

This module provides two layers:

1) `LogDecoder`:
   - Holds the collaborators (candidate store, config, diagnostic logger).
   - `decode(log, transaction)` dispatches to "no target", "known interface"
     or "derive candidates" and assembles the final result.

2) `decode_log(...)` (convenience wrapper):
   - Builds a `LogDecoder` for one call, for scripts and the CLI.
"""

from __future__ import annotations

import logging

from logdecode.core.config import DEFAULT_DECODER_CONFIG, DecoderConfig
from logdecode.core.interfaces import ICandidateStore
from logdecode.core.models import DecodeResult, Failed, FailureReason, RawLog, TransactionContext
from logdecode.decoding.formatter import build_decoded
from logdecode.decoding.matcher import Match, match_interface
from logdecode.resolution.resolver import CandidateResolver
from logdecode.storage.candidates import InMemoryCandidateStore

logger = logging.getLogger(__name__)


class LogDecoder:
    """Decode raw logs into `Decoded`, `Unverified` or `Failed` results.

    Stateless apart from its collaborators; safe to share between threads as
    long as the candidate store is.
    """

    def __init__(
        self,
        store: ICandidateStore | None = None,
        *,
        config: DecoderConfig = DEFAULT_DECODER_CONFIG,
        logger: logging.Logger = logger,
    ) -> None:
        self._logger = logger
        # Without a store every unverified log resolves to an empty candidate list
        self._resolver = CandidateResolver(
            store if store is not None else InMemoryCandidateStore(), config=config, logger=logger
        )

    def decode(self, log: RawLog, transaction: TransactionContext) -> DecodeResult:
        if transaction.target_address is None:
            return Failed(FailureReason.NO_TARGET)

        if transaction.known_interface:
            # A verified interface that does not match never falls back to candidates.
            result = match_interface(
                transaction.known_interface, log, tx_hash=transaction.hash, logger=self._logger
            )
            if isinstance(result, Match):
                return build_decoded(result)
            return Failed(FailureReason.COULD_NOT_DECODE)

        return self._resolver.resolve(log, tx_hash=transaction.hash)


def decode_log(
    log: RawLog,
    transaction: TransactionContext,
    *,
    store: ICandidateStore | None = None,
    config: DecoderConfig = DEFAULT_DECODER_CONFIG,
    logger: logging.Logger = logger,
) -> DecodeResult:
    """One-shot helper around `LogDecoder.decode`."""
    return LogDecoder(store, config=config, logger=logger).decode(log, transaction)
