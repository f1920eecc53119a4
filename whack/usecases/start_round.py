from __future__ import annotations
import time
from dataclasses import dataclass
from ..domain.entities import RoundSnapshot
from ..domain.errors import RoundStateError
from ..domain.ports import Clock, UseCaseError
from ..domain.round_engine import RoundEngine


@dataclass
class StartRound:
    engine: RoundEngine
    clock: Clock = time.monotonic

    def __call__(self) -> RoundSnapshot:
        try:
            return self.engine.start(self.clock())
        except RoundStateError as e:
            raise UseCaseError("ROUND_ACTIVE", "A round is already in progress.") from e
