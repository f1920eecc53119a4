"""Root logger setup for the game.

The level comes from, in order: ``WHACK_LOG_LEVEL`` (name or number), a truthy
``WHACK_DEBUG`` flag, the "debug logging" checkbox in the settings dialog,
and finally INFO. Third-party loggers that are chatty at DEBUG (matplotlib's
font manager in particular) are pinned to WARNING.
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
LEVEL_ENV_VAR = "WHACK_LOG_LEVEL"
DEBUG_ENV_VAR = "WHACK_DEBUG"

_NOISY_LOGGERS = ("matplotlib", "PIL")
_TRUTHY = {"1", "true", "yes", "on"}


def _parse_level(value: Union[int, str, None], fallback: int) -> int:
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    named = logging.getLevelName(text.upper())
    # getLevelName returns "Level X" for unknown names
    return named if isinstance(named, int) else fallback


def env_level() -> Optional[int]:
    """Level forced by the environment, or None when nothing is set."""
    explicit = os.getenv(LEVEL_ENV_VAR)
    if explicit and explicit.strip():
        return _parse_level(explicit, logging.INFO)
    flag = os.getenv(DEBUG_ENV_VAR)
    if flag is not None and flag.strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def _set_root_level(level: int) -> None:
    logging.getLogger().setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def configure_root(default_level: Union[int, str] = logging.INFO) -> int:
    """Install the compact console format once and return the effective level."""
    forced = env_level()
    effective = forced if forced is not None else _parse_level(default_level, logging.INFO)

    if not logging.getLogger().handlers:
        logging.basicConfig(level=effective, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    _set_root_level(effective)
    return effective


def apply_gui_preferences(debug_enabled: bool) -> int:
    """Follow the settings checkbox unless the environment forces a level."""
    forced = env_level()
    if forced is not None:
        level = forced
    else:
        level = logging.DEBUG if debug_enabled else logging.INFO
    _set_root_level(level)
    return level


def level_name(level: int) -> str:
    return logging.getLevelName(level)


def env_requests_debug() -> bool:
    """True when the environment forces DEBUG (or lower)."""
    forced = env_level()
    return forced is not None and forced <= logging.DEBUG


__all__ = [
    "apply_gui_preferences",
    "configure_root",
    "env_level",
    "env_requests_debug",
    "level_name",
]
