
"""Domain value objects shared by the round engine, use cases, and view models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

HoleIndex = int


class HoleState(Enum):
    """Visual state of a single mole hole."""

    DOWN = "down"
    UP = "up"
    HIT = "hit"


class RoundPhase(Enum):
    """Lifecycle phase of a round."""

    IDLE = "idle"
    RUNNING = "running"
    COOLDOWN = "cooldown"


@dataclass(frozen=True)
class RoundSnapshot:
    """Immutable view of the round at one instant."""

    phase: RoundPhase
    """Current lifecycle phase."""
    remaining_s: Optional[int]
    """Whole seconds left on the countdown, ``None`` while idle."""
    score: Optional[int]
    """Hits registered in the current round, ``None`` while idle."""
    holes: Tuple[HoleState, ...]
    """Per-hole state in row-major order."""


@dataclass(frozen=True)
class RoundResult:
    """Outcome of a finished round."""

    score: int
    """Number of successful hits."""
    pops: int
    """Number of times any mole rose during the round."""
    round_seconds: int
    """Configured round length."""
    hole_count: int
    """Number of holes on the grid."""

    def __post_init__(self) -> None:
        if self.score < 0 or self.pops < 0:
            raise ValueError("RoundResult counters cannot be negative.")
        if self.score > self.pops:
            raise ValueError("RoundResult score cannot exceed pops.")


@dataclass(frozen=True)
class TickResult:
    """Result of advancing the engine to a timestamp."""

    snapshot: RoundSnapshot
    """State after the advance."""
    changed: Tuple[HoleIndex, ...] = ()
    """Indexes of holes whose state changed during the advance."""
    finished: Optional[RoundResult] = None
    """Set only by the advance that ended the round."""


@dataclass(frozen=True)
class ScoreRecord:
    """A finished round stamped with its wall-clock completion time."""

    finished_at: datetime
    """Timezone-aware completion timestamp."""
    score: int
    pops: int
    round_seconds: int
    hole_count: int

    def __post_init__(self) -> None:
        if not isinstance(self.finished_at, datetime):
            raise TypeError("ScoreRecord requires a datetime instance.")
        if self.finished_at.tzinfo is None or self.finished_at.tzinfo.utcoffset(self.finished_at) is None:
            raise ValueError("ScoreRecord.finished_at must be timezone-aware.")

    @classmethod
    def from_result(cls, result: RoundResult, finished_at: datetime) -> "ScoreRecord":
        return cls(
            finished_at=finished_at,
            score=result.score,
            pops=result.pops,
            round_seconds=result.round_seconds,
            hole_count=result.hole_count,
        )

    @property
    def accuracy(self) -> float:
        if not self.pops:
            return 0.0
        return self.score / self.pops
