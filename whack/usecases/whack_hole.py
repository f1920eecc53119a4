from __future__ import annotations
import time
from dataclasses import dataclass
from ..domain.entities import HoleIndex
from ..domain.errors import HoleIndexError
from ..domain.ports import Clock, UseCaseError
from ..domain.round_engine import RoundEngine


@dataclass
class WhackHole:
    """Register a click on a hole; returns True when it scored."""

    engine: RoundEngine
    clock: Clock = time.monotonic

    def __call__(self, index: HoleIndex) -> bool:
        try:
            return self.engine.whack(index, self.clock())
        except HoleIndexError as e:
            raise UseCaseError("INVALID_HOLE", str(e)) from e
