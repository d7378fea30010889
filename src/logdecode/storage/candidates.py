"""In-memory candidate store and helpers to populate stores from ABIs."""

from __future__ import annotations

import json
import os
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

from logdecode.core.models import CandidateFragment
from logdecode.decoding.abi import AbiSpec, get_descriptor, get_entries
from logdecode.errors import InvalidInterface


def fragments_from_abi(abi: AbiSpec) -> list[CandidateFragment]:
    """Split a verified ABI into one fragment per function and event.

    Each fragment is keyed by the first 4 bytes of its descriptor's identifier
    and keeps the raw ABI entry so it can be re-parsed at lookup time.
    """
    out: list[CandidateFragment] = []
    for entry in get_entries(abi):
        descriptor = get_descriptor(entry)
        raw = entry.model_dump(exclude_none=True)
        out.append(CandidateFragment(identifier=descriptor.selector, definition=(raw,)))
    return out


class InMemoryCandidateStore:
    """Dict-backed store; insertion order is the store-defined lookup order.

    Identical `(identifier, abi)` pairs are only stored once.
    """

    def __init__(self, fragments: Iterable[CandidateFragment] = ()) -> None:
        self._by_id: dict[bytes, list[CandidateFragment]] = defaultdict(list)
        self._seen: set[tuple[bytes, str]] = set()
        self.add_many(fragments)

    def __len__(self) -> int:
        return len(self._seen)

    def add(self, fragment: CandidateFragment) -> bool:
        """Insert one fragment; return False if it was already present."""
        key = (fragment.identifier, json.dumps(list(fragment.definition), sort_keys=True))
        if key in self._seen:
            return False
        self._seen.add(key)
        self._by_id[fragment.identifier].append(fragment)
        return True

    def add_many(self, fragments: Iterable[CandidateFragment]) -> int:
        """Insert many fragments; return how many were new."""
        return sum(self.add(f) for f in fragments)

    def upsert_from_abi(self, abi: AbiSpec) -> int:
        return self.add_many(fragments_from_abi(abi))

    def lookup_by_identifier(self, identifier: bytes, *, limit: int) -> list[CandidateFragment]:
        return list(self._by_id.get(identifier, ())[:limit])

    # ---- JSONL persistence ----

    @classmethod
    def from_jsonl(cls, path: str | Path) -> InMemoryCandidateStore:
        """Load fragments from a JSONL file (`{"identifier": "0x…", "abi": [...]}` per line)."""
        store = cls()
        with open(path, encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    store.add(CandidateFragment.from_json(json.loads(line)))
                except (ValueError, KeyError) as e:
                    raise InvalidInterface(f"{path}:{lineno}: bad fragment: {e}") from e
        return store

    def to_jsonl(self, path: str | Path) -> None:
        """Write all fragments as JSON lines, flushed and synced."""
        with open(path, "w", encoding="utf-8") as f:
            for fragments in self._by_id.values():
                for fragment in fragments:
                    f.write(fragment.to_json_line())
            f.flush()
            os.fsync(f.fileno())
