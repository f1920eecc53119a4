"""Domain package exports for round state, configuration, and errors."""

from .entities import (
    HoleIndex,
    HoleState,
    RoundPhase,
    RoundResult,
    RoundSnapshot,
    ScoreRecord,
    TickResult,
)
from .errors import ConfigError, HoleIndexError, RoundError, RoundStateError
from .round_config import RoundConfig
from .round_engine import RoundEngine

__all__ = [
    "ConfigError",
    "HoleIndex",
    "HoleIndexError",
    "HoleState",
    "RoundConfig",
    "RoundEngine",
    "RoundError",
    "RoundPhase",
    "RoundResult",
    "RoundSnapshot",
    "RoundStateError",
    "ScoreRecord",
    "TickResult",
]
