"""Presenter for the settings dialog's Save action.

Settings are applied to ``SettingsVM`` and written through its ``on_save``
hook (the ``SaveSettings`` use case). A failed write rolls the view-model
back, so what the game uses always matches what is on disk.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from ..domain.ports import UseCaseError
from ..viewmodels.settings_vm import SettingsVM

OnError = Callable[[str], None]


class SettingsPresenter:
    """Validate, persist and announce settings submitted by the user."""

    def __init__(
        self,
        *,
        win,
        settings_vm: SettingsVM,
        is_round_active: Callable[[], bool],
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.win = win
        self.settings_vm = settings_vm
        self._is_round_active = is_round_active

    def save(self, payload: Mapping[str, Any], on_error: OnError) -> bool:
        """Apply and persist ``payload``; returns False (after ``on_error``) on failure."""
        previous = self.settings_vm.to_dict()
        try:
            self.settings_vm.apply_dict(payload)
        except ValueError as exc:
            on_error(str(exc))
            return False

        try:
            self.settings_vm.cmd_save()
        except UseCaseError as exc:
            self._log.warning("Could not save settings: %s", exc.message)
            self.settings_vm.apply_dict(previous)
            on_error(exc.message)
            self.win.show_toast(exc.message)
            return False

        if self._is_round_active():
            self.win.show_toast("Settings saved; they apply to the next round.")
        else:
            self.win.show_toast("Settings saved.")
        return True


__all__ = ["SettingsPresenter"]
