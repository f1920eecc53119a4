from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from ..domain.entities import ScoreRecord


@dataclass
class HistoryVM:
    """Score history state for the status bar and the history chart.

    Does not perform I/O; records are loaded/appended through use cases.
    """

    limit: int = 30
    records: List[ScoreRecord] = field(default_factory=list)

    def set_records(self, records: Iterable[ScoreRecord]) -> None:
        self.records = sorted(records, key=lambda r: r.finished_at)

    def add_record(self, record: ScoreRecord) -> None:
        self.records.append(record)

    def series(self) -> Tuple[List[int], List[int]]:
        """Return ``(round_numbers, scores)`` for the most recent rounds."""
        total = len(self.records)
        recent = self.records[-self.limit:] if self.limit > 0 else list(self.records)
        first = total - len(recent) + 1
        return list(range(first, total + 1)), [r.score for r in recent]

    @property
    def best_score(self) -> Optional[int]:
        if not self.records:
            return None
        return max(r.score for r in self.records)

    @property
    def average_score(self) -> Optional[float]:
        if not self.records:
            return None
        return sum(r.score for r in self.records) / len(self.records)

    @property
    def average_accuracy(self) -> Optional[float]:
        """Mean share of risen moles hit per round."""
        if not self.records:
            return None
        return sum(r.accuracy for r in self.records) / len(self.records)

    def summary_text(self) -> str:
        if not self.records:
            return "No rounds played yet."
        return (
            f"Rounds: {len(self.records)}  Best: {self.best_score}  "
            f"Avg: {self.average_score:.1f}  Hit rate: {self.average_accuracy:.0%}"
        )
