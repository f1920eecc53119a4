from __future__ import annotations
import time
from dataclasses import dataclass
from ..domain.entities import TickResult
from ..domain.errors import RoundError
from ..domain.ports import Clock, UseCaseError
from ..domain.round_engine import RoundEngine


@dataclass
class AdvanceRound:
    engine: RoundEngine
    clock: Clock = time.monotonic

    def __call__(self) -> TickResult:
        try:
            return self.engine.advance(self.clock())
        except RoundError as e:
            raise UseCaseError("TICK_FAILED", str(e)) from e
