from __future__ import annotations
from dataclasses import dataclass
from typing import List
from ..domain.entities import ScoreRecord
from ..domain.ports import StoragePort, UseCaseError


@dataclass
class LoadScoreHistory:
    storage: StoragePort

    def __call__(self) -> List[ScoreRecord]:
        try:
            return list(self.storage.load_round_records())
        except Exception as e:
            raise UseCaseError("LOAD_HISTORY_FAILED", str(e)) from e
