"""Data containers shared across the generator"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .errors import EmphasisNotFound


@dataclass(frozen=True)
class WordRecord:
    """One spelling word and its study material."""

    word: str
    pronunciation: str = ""
    definition: str = ""
    sentence: str = ""


@dataclass(frozen=True)
class ExtractionStats:
    considered_rows: int = 0
    skipped_no_year_marker: int = 0
    skipped_no_word: int = 0


@dataclass(frozen=True)
class ExtractionResult:
    records: tuple[WordRecord, ...]
    stats: ExtractionStats


@dataclass(frozen=True)
class RoundContext:
    """Document-wide values substituted before any block is duplicated."""

    year: str
    round_key: str
    event_name: str
    event_date: str
    created_date: str

    def global_values(self) -> dict[str, str]:
        return {
            "year": self.year,
            "round": self.round_key,
            "event_name": self.event_name,
            "event_date": self.event_date,
            "created_date": self.created_date,
        }


@dataclass
class ExpansionResult:
    """Outcome of one template expansion run."""

    block_count: int
    word_count: int
    warnings: list[EmphasisNotFound] = field(default_factory=list)


@dataclass(frozen=True)
class GeneratedArtifact:
    round_key: str
    kind: str  # "Slides" or "Words"
    path: Path
    word_count: int
