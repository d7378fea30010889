"""Candidate stores implementing `ICandidateStore`.

This package provides:
- InMemoryCandidateStore: dict-backed store with JSONL load/save
- DuckDBCandidateStore: persistent store backed by a DuckDB table
- fragments_from_abi: split a verified ABI into storable fragments
"""

from logdecode.storage.candidates import InMemoryCandidateStore, fragments_from_abi
from logdecode.storage.duckdb_store import DuckDBCandidateStore

__all__ = [
    "InMemoryCandidateStore",
    "DuckDBCandidateStore",
    "fragments_from_abi",
]
