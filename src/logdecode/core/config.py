from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DecoderConfig:
    """Tuning knobs for the decode orchestrator and candidate resolver."""

    candidate_limit: int = 3  # fragments fetched per derived identifier
    max_candidates: int = 1  # stop scanning after this many successful decodes

    def __post_init__(self) -> None:
        if self.candidate_limit < 1:
            raise ValueError("candidate_limit must be >= 1")
        if self.max_candidates < 1:
            raise ValueError("max_candidates must be >= 1")


@dataclass(frozen=True)
class StoreConfig:
    """Configuration for the DuckDB-backed candidate store."""

    path: Path | str = ":memory:"
    table: str = "contract_methods"
    read_only: bool = False


DEFAULT_DECODER_CONFIG = DecoderConfig()
