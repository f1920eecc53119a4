"""Single-clock round engine for the mole grid.

All round state lives here. Pending hole transitions are kept in a heap of
``(due_at, seq, index)`` entries and :meth:`RoundEngine.advance` drains every
entry that is due, so outcomes depend only on timestamps and never on how
often the caller ticks. The engine performs no I/O and never reads a clock
itself; callers pass monotonic timestamps in seconds.
"""

from __future__ import annotations

import heapq
import logging
import math
import random
from typing import List, Optional, Set, Tuple

from .entities import (
    HoleIndex,
    HoleState,
    RoundPhase,
    RoundResult,
    RoundSnapshot,
    TickResult,
)
from .errors import HoleIndexError, RoundStateError
from .round_config import RoundConfig, sample_down_s, sample_up_s

_log = logging.getLogger(__name__)


class RoundEngine:
    """Own the countdown, the score, and every hole's up/down cycle."""

    def __init__(
        self,
        config: Optional[RoundConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._config = config or RoundConfig()
        self._rng = rng or random.Random()
        self._phase = RoundPhase.IDLE
        self._holes: List[HoleState] = [HoleState.DOWN] * self._config.hole_count
        self._heap: List[Tuple[float, int, HoleIndex]] = []
        self._seq = 0
        self._score = 0
        self._pops = 0
        self._now = 0.0
        self._started_at: Optional[float] = None
        self._ends_at: Optional[float] = None
        self._cooldown_until: Optional[float] = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def config(self) -> RoundConfig:
        return self._config

    @property
    def phase(self) -> RoundPhase:
        return self._phase

    @property
    def score(self) -> int:
        """Hits in the current or most recent round."""
        return self._score

    @property
    def pops(self) -> int:
        return self._pops

    @property
    def ends_at(self) -> Optional[float]:
        return self._ends_at

    def hole_state(self, index: HoleIndex) -> HoleState:
        self._check_index(index)
        return self._holes[index]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def start(self, now: float) -> RoundSnapshot:
        """Begin a round at ``now`` with every mole popping up at once."""
        if self._phase is not RoundPhase.IDLE:
            raise RoundStateError(f"Cannot start a round while {self._phase.value}.")
        now = self._move_to(now)

        self._holes = [HoleState.DOWN] * self._config.hole_count
        self._heap.clear()
        self._seq = 0
        self._score = 0
        self._pops = 0
        self._started_at = now
        self._ends_at = now + self._config.round_seconds
        self._cooldown_until = None
        self._phase = RoundPhase.RUNNING

        for index in range(self._config.hole_count):
            self._schedule(now, index)
        self._drain(now)

        _log.info(
            "Round started: %ds, %d holes", self._config.round_seconds, self._config.hole_count
        )
        return self.snapshot()

    def advance(self, now: float) -> TickResult:
        """Apply every transition due up to ``now`` and end the round on time."""
        now = self._move_to(now)
        changed: Set[HoleIndex] = set()
        finished: Optional[RoundResult] = None

        if self._phase is RoundPhase.RUNNING:
            assert self._ends_at is not None
            if now < self._ends_at:
                changed |= self._drain(now)
            else:
                changed |= self._drain(self._ends_at, inclusive=False)
                changed |= self._finish()
                finished = RoundResult(
                    score=self._score,
                    pops=self._pops,
                    round_seconds=self._config.round_seconds,
                    hole_count=self._config.hole_count,
                )
                _log.info("Round over: score=%d pops=%d", finished.score, finished.pops)

        if self._phase is RoundPhase.COOLDOWN:
            assert self._cooldown_until is not None
            if now >= self._cooldown_until:
                self._phase = RoundPhase.IDLE
                self._started_at = None
                self._ends_at = None
                self._cooldown_until = None
                _log.debug("Cooldown elapsed; ready for a new round")

        return TickResult(
            snapshot=self.snapshot(),
            changed=tuple(sorted(changed)),
            finished=finished,
        )

    def whack(self, index: HoleIndex, now: float) -> bool:
        """Register a hit on ``index`` if its mole is up and time remains."""
        self._check_index(index)
        now = self._move_to(now)
        if self._phase is not RoundPhase.RUNNING:
            return False
        assert self._ends_at is not None
        if now >= self._ends_at:
            return False
        if self._holes[index] is not HoleState.UP:
            return False
        self._holes[index] = HoleState.HIT
        self._score += 1
        _log.debug("Hit on hole %d (score=%d)", index, self._score)
        return True

    def snapshot(self) -> RoundSnapshot:
        if self._phase is RoundPhase.IDLE:
            remaining: Optional[int] = None
            score: Optional[int] = None
        else:
            remaining = self._remaining_s()
            score = self._score
        return RoundSnapshot(
            phase=self._phase,
            remaining_s=remaining,
            score=score,
            holes=tuple(self._holes),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _move_to(self, now: float) -> float:
        # Engine time never runs backwards.
        self._now = max(self._now, float(now))
        return self._now

    def _remaining_s(self) -> int:
        if self._phase is not RoundPhase.RUNNING or self._started_at is None:
            return 0
        elapsed = self._now - self._started_at
        return max(0, self._config.round_seconds - int(math.floor(elapsed)))

    def _schedule(self, due_at: float, index: HoleIndex) -> None:
        self._seq += 1
        heapq.heappush(self._heap, (due_at, self._seq, index))

    def _drain(self, until: float, *, inclusive: bool = True) -> Set[HoleIndex]:
        changed: Set[HoleIndex] = set()
        while self._heap:
            due_at, _, index = self._heap[0]
            if due_at > until or (not inclusive and due_at >= until):
                break
            heapq.heappop(self._heap)
            if self._holes[index] is HoleState.DOWN:
                self._holes[index] = HoleState.UP
                self._pops += 1
                self._schedule(due_at + sample_up_s(self._config, self._rng), index)
            else:
                self._holes[index] = HoleState.DOWN
                self._schedule(due_at + sample_down_s(self._config, self._rng), index)
            changed.add(index)
        return changed

    def _finish(self) -> Set[HoleIndex]:
        changed = {i for i, state in enumerate(self._holes) if state is not HoleState.DOWN}
        self._holes = [HoleState.DOWN] * self._config.hole_count
        self._heap.clear()
        self._phase = RoundPhase.COOLDOWN
        assert self._ends_at is not None
        self._cooldown_until = self._ends_at + self._config.cooldown_s
        return changed

    def _check_index(self, index: HoleIndex) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise HoleIndexError(f"Hole index must be an integer, got {index!r}.")
        if not 0 <= index < self._config.hole_count:
            raise HoleIndexError(
                f"Hole index {index} outside 0..{self._config.hole_count - 1}."
            )


__all__ = ["RoundEngine"]
