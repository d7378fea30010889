from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from logdecode.core.models import CandidateFragment


# ---------------------------------------------------------------------------
# ICandidateStore
# ---------------------------------------------------------------------------

@runtime_checkable
class ICandidateStore(Protocol):
    """
    Read-only lookup of previously recorded interface fragments.

    Domain expectations:
    - Fragments are keyed by a 4-byte identifier; several may share one.
    - Results come back in store-defined order, at most `limit` of them.
    - Zero results is a normal answer, not an error.
    - Failures are raised as `CandidateLookupError` (or `TimeoutError`);
      the resolver turns both into a "could not decode" outcome.
    """

    def lookup_by_identifier(self, identifier: bytes, *, limit: int) -> Sequence[CandidateFragment]:
        """
        Return up to `limit` fragments whose identifier equals `identifier`.

        Implementations:
        - InMemoryCandidateStore (dict, optionally loaded from JSONL)
        - DuckDBCandidateStore (file or in-memory database)
        """
        ...
