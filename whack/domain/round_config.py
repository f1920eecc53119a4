"""Round configuration and randomized hole timing."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from .errors import ConfigError


_DURATION_FIELDS = ("min_up_s", "max_up_s", "min_down_s", "max_down_s", "cooldown_s")


@dataclass(frozen=True)
class RoundConfig:
    """Timing and grid parameters for one round.

    Durations are in seconds. Each up/down period is drawn uniformly from the
    ``[min, max]`` range of its state every time a hole changes state.
    """

    round_seconds: int = 20
    rows: int = 4
    cols: int = 5
    min_up_s: float = 0.5
    max_up_s: float = 4.0
    min_down_s: float = 2.0
    max_down_s: float = 4.0
    cooldown_s: float = 5.0

    def __post_init__(self) -> None:
        for name in ("round_seconds", "rows", "cols"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer.")
        for name in _DURATION_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number of seconds.")
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be a finite number of seconds.")
        for name in ("min_up_s", "min_down_s"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be greater than zero.")
        if self.min_up_s > self.max_up_s:
            raise ConfigError("min_up_s must not exceed max_up_s.")
        if self.min_down_s > self.max_down_s:
            raise ConfigError("min_down_s must not exceed max_down_s.")
        if self.cooldown_s < 0:
            raise ConfigError("cooldown_s must be non-negative.")

    @property
    def hole_count(self) -> int:
        return self.rows * self.cols


def sample_up_s(config: RoundConfig, rng: random.Random) -> float:
    """Draw how long a mole stays up."""
    return rng.uniform(config.min_up_s, config.max_up_s)


def sample_down_s(config: RoundConfig, rng: random.Random) -> float:
    """Draw how long a hole stays empty before the next mole rises."""
    return rng.uniform(config.min_down_s, config.max_down_s)


__all__ = ["RoundConfig", "sample_down_s", "sample_up_s"]
