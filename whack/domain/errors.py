"""Domain-level error types raised by the round engine and configuration.

Use cases translate these into :class:`whack.domain.ports.UseCaseError` so the
UI layer only ever deals with one user-presentable error type.
"""
from __future__ import annotations


class RoundError(Exception):
    """Base class for round engine failures."""


class RoundStateError(RoundError):
    """Raised when an operation is not allowed in the current round phase."""


class HoleIndexError(RoundError, IndexError):
    """Raised when a hole index is outside the configured grid."""


class ConfigError(ValueError):
    """Raised when round configuration values are inconsistent."""


__all__ = ["ConfigError", "HoleIndexError", "RoundError", "RoundStateError"]
