from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..domain.errors import ConfigError
from ..domain.round_config import RoundConfig
from ..utils.logging import env_requests_debug

_INT_KEYS = ("round_seconds", "rows", "cols", "tick_ms")
_FLOAT_KEYS = ("min_up_s", "max_up_s", "min_down_s", "max_down_s", "cooldown_s")

MAX_ROWS = 10
MAX_COLS = 10


@dataclass
class GameSettings:
    """Typed game settings that persist via StorageLocal."""

    round_seconds: int = 20
    rows: int = 4
    cols: int = 5
    min_up_s: float = 0.5
    max_up_s: float = 4.0
    min_down_s: float = 2.0
    max_down_s: float = 4.0
    cooldown_s: float = 5.0
    tick_ms: int = 100


def _default_debug_logging() -> bool:
    return env_requests_debug()


class SettingsVM:
    """Keeps game settings UI state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[GameSettings] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or GameSettings()
        self.on_save = on_save
        self.debug_logging: bool = _default_debug_logging()

    # ------------------------------------------------------------------
    # Read-only shortcuts used by the presenter
    # ------------------------------------------------------------------
    @property
    def tick_ms(self) -> int:
        return self.config.tick_ms

    @property
    def hole_count(self) -> int:
        return self.config.rows * self.config.cols

    @property
    def grid_shape(self) -> tuple[int, int]:
        return self.config.rows, self.config.cols

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        try:
            self.to_round_config()
        except ConfigError:
            return False
        if not 1 <= self.config.rows <= MAX_ROWS or not 1 <= self.config.cols <= MAX_COLS:
            return False
        return self.config.tick_ms > 0

    def to_round_config(self) -> RoundConfig:
        cfg = self.config
        return RoundConfig(
            round_seconds=cfg.round_seconds,
            rows=cfg.rows,
            cols=cfg.cols,
            min_up_s=cfg.min_up_s,
            max_up_s=cfg.max_up_s,
            min_down_s=cfg.min_down_s,
            max_down_s=cfg.max_down_s,
            cooldown_s=cfg.cooldown_s,
        )

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted or dialog-provided settings to the view-model.

        The update is all-or-nothing: on ``ValueError`` the previous settings
        remain in place.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed = {f.name for f in fields(GameSettings)} | {"debug_logging"}
        unknown = set(payload.keys()) - allowed
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates: Dict[str, Any] = {}
        for key in _INT_KEYS:
            if key in payload:
                updates[key] = self._coerce_int(key, payload[key])
        for key in _FLOAT_KEYS:
            if key in payload:
                updates[key] = self._coerce_float(key, payload[key])

        candidate = replace(self.config, **updates)
        previous = self.config
        self.config = candidate
        if not self.is_valid():
            self.config = previous
            raise ValueError(self._describe_invalid(candidate))

        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    def cmd_save(self) -> None:
        if not self.is_valid():
            raise ValueError("Settings invalid")
        if self.on_save:
            self.on_save(self.to_dict())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _describe_invalid(candidate: GameSettings) -> str:
        if not 1 <= candidate.rows <= MAX_ROWS or not 1 <= candidate.cols <= MAX_COLS:
            return f"Grid must be between 1x1 and {MAX_ROWS}x{MAX_COLS}."
        if candidate.tick_ms <= 0:
            return "tick_ms must be positive."
        try:
            RoundConfig(**{k: v for k, v in asdict(candidate).items() if k != "tick_ms"})
        except ConfigError as exc:
            return str(exc)
        return "Settings invalid"

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"{name} must be an integer.")
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        raise ValueError(f"{name} must be an integer.")

    @staticmethod
    def _coerce_float(name: str, value: Any) -> float:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be a number.")
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError as exc:
                raise ValueError(f"{name} must be a number.") from exc
        else:
            raise ValueError(f"{name} must be a number.")
        # float() accepts "nan" and "inf"
        if not math.isfinite(number):
            raise ValueError(f"{name} must be a finite number.")
        return number


def default_settings_payload() -> dict:
    """Return a fresh snapshot containing the default settings payload."""
    return SettingsVM().to_dict()
