"""DuckDB-backed candidate store.

Fragments live in a single table keyed by their 4-byte identifier:

    id          BIGINT   insertion sequence (lookup order)
    identifier  BLOB     4-byte selector
    abi         VARCHAR  JSON array of raw ABI entries (canonical key order)

`(identifier, abi)` is unique so re-importing a verified contract is a no-op.
All DuckDB failures surface as `CandidateLookupError`.
"""

from __future__ import annotations

import json
import re
import threading
from collections.abc import Iterable

import duckdb

from logdecode.core.config import StoreConfig
from logdecode.core.models import CandidateFragment
from logdecode.decoding.abi import AbiSpec
from logdecode.errors import CandidateLookupError
from logdecode.storage.candidates import fragments_from_abi

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class DuckDBCandidateStore:
    """Candidate store persisted in a DuckDB database (file or `:memory:`).

    One connection per store; a lock serialises access so the store can be
    shared between threads.
    """

    def __init__(self, config: StoreConfig | None = None) -> None:
        self.config = config or StoreConfig()
        if not _IDENT_RE.fullmatch(self.config.table):
            raise ValueError(f"invalid table name: {self.config.table!r}")
        self._table = self.config.table
        self._lock = threading.Lock()
        try:
            self._con = duckdb.connect(str(self.config.path), read_only=self.config.read_only)
            if not self.config.read_only:
                self._create_schema()
        except duckdb.Error as e:
            raise CandidateLookupError(f"cannot open candidate store {self.config.path}: {e}") from e

    def _create_schema(self) -> None:
        self._con.execute(f"CREATE SEQUENCE IF NOT EXISTS {self._table}_seq")
        self._con.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self._table} (
                id BIGINT PRIMARY KEY DEFAULT nextval('{self._table}_seq'),
                identifier BLOB NOT NULL,
                abi VARCHAR NOT NULL,
                UNIQUE (identifier, abi)
            )
            """
        )

    def add_many(self, fragments: Iterable[CandidateFragment]) -> int:
        """Insert fragments, skipping duplicates; return how many were new."""
        rows = [(f.identifier, json.dumps(list(f.definition), sort_keys=True)) for f in fragments]
        inserted = 0
        with self._lock:
            try:
                for identifier, abi in rows:
                    hit = self._con.execute(
                        f"SELECT 1 FROM {self._table} WHERE identifier = ? AND abi = ?",
                        [identifier, abi],
                    ).fetchone()
                    if hit is not None:
                        continue
                    self._con.execute(
                        f"INSERT INTO {self._table} (identifier, abi) VALUES (?, ?)",
                        [identifier, abi],
                    )
                    inserted += 1
            except duckdb.Error as e:
                raise CandidateLookupError(f"cannot write fragments: {e}") from e
        return inserted

    def upsert_from_abi(self, abi: AbiSpec) -> int:
        return self.add_many(fragments_from_abi(abi))

    def lookup_by_identifier(self, identifier: bytes, *, limit: int) -> list[CandidateFragment]:
        with self._lock:
            try:
                rows = self._con.execute(
                    f"SELECT identifier, abi FROM {self._table} WHERE identifier = ? ORDER BY id LIMIT {int(limit)}",
                    [identifier],
                ).fetchall()
            except duckdb.Error as e:
                raise CandidateLookupError(f"lookup for 0x{identifier.hex()} failed: {e}") from e

        out: list[CandidateFragment] = []
        for ident, abi in rows:
            try:
                definition = json.loads(abi)
            except json.JSONDecodeError:
                definition = []  # unparsable rows decode to nothing
            out.append(CandidateFragment(identifier=bytes(ident), definition=tuple(definition)))
        return out

    def count(self) -> int:
        with self._lock:
            (n,) = self._con.execute(f"SELECT count(*) FROM {self._table}").fetchone()
        return int(n)

    def close(self) -> None:
        with self._lock:
            self._con.close()

    def __enter__(self) -> DuckDBCandidateStore:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
