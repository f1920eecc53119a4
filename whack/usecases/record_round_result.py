from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable
from ..domain.entities import RoundResult, ScoreRecord
from ..domain.ports import StoragePort, UseCaseError


def _local_now() -> datetime:
    return datetime.now().astimezone().replace(microsecond=0)


@dataclass
class RecordRoundResult:
    """Stamp a finished round with wall-clock time and append it to history."""

    storage: StoragePort
    now: Callable[[], datetime] = field(default=_local_now)

    def __call__(self, result: RoundResult) -> ScoreRecord:
        record = ScoreRecord.from_result(result, self.now())
        try:
            self.storage.append_round_record(record)
        except Exception as e:
            raise UseCaseError("SAVE_HISTORY_FAILED", str(e)) from e
        return record
