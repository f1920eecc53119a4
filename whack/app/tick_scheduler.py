"""Scheduler helper that owns the game's timer callbacks.

The presenter passes Tk ``after`` and ``after_cancel`` callables into this
class so every pending timer is tracked in one place and can be canceled
when a round stops or the app closes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict


ScheduleFn = Callable[[int, Callable[[], None]], str]
CancelFn = Callable[[str], None]

_log = logging.getLogger(__name__)


@dataclass
class TickHandle:
    """Timer token associated with a single channel.

    Attributes:
        channel: Channel key (for example ``round``).
        token: Token returned by the UI scheduler implementation.
    """
    channel: str
    token: str


class TickScheduler:
    """Manage one pending timer per channel using a UI scheduler (for example Tk)."""

    def __init__(self, schedule: ScheduleFn, cancel: CancelFn) -> None:
        """Store schedule/cancel functions and initialize handle registry.

        Args:
            schedule: Function compatible with ``after(delay_ms, callback)``.
            cancel: Function compatible with ``after_cancel(token)``.
        """
        self._schedule = schedule
        self._cancel = cancel
        self._handles: Dict[str, TickHandle] = {}

    def schedule(self, channel: str, delay_ms: int, callback: Callable[[], None]) -> None:
        """Schedule or reschedule the next callback for a channel.

        The handle is dropped before ``callback`` runs, so a callback may
        reschedule its own channel.
        """
        delay = max(1, int(delay_ms))
        self.cancel(channel)

        def _fire() -> None:
            handle = self._handles.get(channel)
            if handle is not None and handle.token == token_box[0]:
                del self._handles[channel]
            callback()

        token_box = [""]
        token = self._schedule(delay, _fire)
        token_box[0] = token
        self._handles[channel] = TickHandle(channel=channel, token=token)

    def cancel(self, channel: str) -> None:
        """Cancel a pending callback for a channel (no-op when none is pending)."""
        handle = self._handles.pop(channel, None)
        if not handle:
            return
        try:
            self._cancel(handle.token)
        except Exception as exc:
            # Tk raises if the token already fired or the window is gone.
            _log.debug("Cancel of %s timer ignored: %s", channel, exc)

    def cancel_all(self) -> None:
        """Cancel all pending callbacks across all channels."""
        for channel in list(self._handles.keys()):
            self.cancel(channel)


__all__ = ["TickHandle", "TickScheduler"]
