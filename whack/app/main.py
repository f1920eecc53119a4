# whack/app/main.py
from __future__ import annotations
import logging
import os
from typing import Dict, Optional

# ---- Views (UI-only) ----
from .views.main_window import MainWindowView
from .views.mole_grid_view import MoleGridView
from .views.score_history_dialog import ScoreHistoryDialog
from .views.settings_dialog import SettingsDialog
from .views.theme import apply_modern_theme

# ---- ViewModels ----
from ..viewmodels.game_vm import GameVM
from ..viewmodels.history_vm import HistoryVM
from ..viewmodels.settings_vm import SettingsVM, default_settings_payload

# ---- UseCases & Adapter ----
from ..adapters.storage_local import StorageLocal
from ..domain.ports import UseCaseError
from ..usecases.load_score_history import LoadScoreHistory
from ..usecases.load_settings import LoadSettings
from ..usecases.save_settings import SaveSettings
from .round_presenter import RoundPresenter
from .settings_presenter import SettingsPresenter
from ..utils import logging as logging_utils

logging_utils.configure_root()


class App:
    """Bootstrap: wire Views <-> ViewModels, storage, and the round presenter."""

    def __init__(self, storage_root: Optional[str] = None) -> None:
        self._log = logging.getLogger(__name__)
        self.win = MainWindowView(
            on_start=self._on_start,
            on_open_settings=self._on_open_settings,
            on_open_history=self._on_open_history,
            on_close=self._on_close,
        )
        self.win.report_callback_exception = self._report_callback_exception
        apply_modern_theme(self.win)

        # ---- LocalStorage Adapter & UseCases ----
        self._storage_root = storage_root or os.environ.get("WHACK_STORAGE_ROOT") or "."
        self._storage = StorageLocal(root_dir=self._storage_root)
        self.uc_load_settings = LoadSettings(self._storage)
        self.uc_save_settings = SaveSettings(self._storage)
        self.uc_load_history = LoadScoreHistory(self._storage)

        # ---- ViewModels ----
        self.settings_vm = SettingsVM(on_save=self.uc_save_settings)
        self.history_vm = HistoryVM()
        self._load_user_settings()

        # ---- Subviews ----
        rows, cols = self.settings_vm.grid_shape
        self.grid = MoleGridView(self.win.grid_host, rows=rows, cols=cols, on_whack=self._on_whack)
        self.grid.pack(fill="both", expand=True)

        self.game_vm = GameVM(
            on_update_header=self.win.set_header,
            on_update_holes=self.grid.apply_styles,
        )

        # ---- Round presenter ----
        self.presenter = RoundPresenter(
            win=self.win,
            game_vm=self.game_vm,
            settings_vm=self.settings_vm,
            history_vm=self.history_vm,
            storage=self._storage,
            on_history_changed=self._on_history_changed,
        )
        self.settings_presenter = SettingsPresenter(
            win=self.win,
            settings_vm=self.settings_vm,
            is_round_active=lambda: self.presenter.is_active,
        )

        self._settings_dialog: Optional[SettingsDialog] = None
        self._history_dialog: Optional[ScoreHistoryDialog] = None

        # ---- Initial UI state ----
        self._load_history()
        self.game_vm.reset(self.settings_vm.hole_count)
        self.win.show_toast("Press Start to play.")

    # ==================================================================
    # Settings
    # ==================================================================
    def _load_user_settings(self) -> None:
        payload: Optional[Dict] = None
        try:
            payload = self.uc_load_settings()
        except UseCaseError as exc:
            self._log.warning("Could not load settings: %s", exc.message)
            self.win.show_toast(f"Could not load settings: {exc.message}")
        if payload is not None:
            try:
                self.settings_vm.apply_dict(payload)
            except ValueError as exc:
                self._log.warning("Ignoring stored settings: %s", exc)
                self.win.show_toast(f"Ignoring stored settings: {exc}")
        self._apply_logging_preferences()

    def _apply_logging_preferences(self) -> None:
        level = logging_utils.apply_gui_preferences(self.settings_vm.debug_logging)
        self._log.debug("Effective GUI log level: %s", logging_utils.level_name(level))

    def _on_open_settings(self) -> None:
        if self._settings_dialog is not None and self._settings_dialog.winfo_exists():
            self._settings_dialog.lift()
            return
        dialog = SettingsDialog(
            self.win,
            on_save=self._on_settings_saved,
            on_reset_defaults=lambda: dialog.set_values(default_settings_payload()),
            on_close=self._on_settings_closed,
        )
        dialog.set_values(self.settings_vm.to_dict())
        self._settings_dialog = dialog

    def _on_settings_saved(self, payload: Dict) -> None:
        dialog = self._settings_dialog
        on_error = dialog.set_error if dialog is not None else self.win.show_toast
        if not self.settings_presenter.save(payload, on_error=on_error):
            return
        self._apply_logging_preferences()
        if not self.presenter.is_active:
            self._sync_grid_shape()
        if dialog is not None:
            dialog.destroy()
            self._settings_dialog = None

    def _on_settings_closed(self) -> None:
        self._settings_dialog = None

    def _sync_grid_shape(self) -> None:
        shape = self.settings_vm.grid_shape
        if self.grid.shape == shape:
            return
        self._log.info("Rebuilding mole grid as %dx%d", *shape)
        self.grid.set_shape(*shape)
        self.game_vm.reset(self.settings_vm.hole_count)

    # ==================================================================
    # Round actions
    # ==================================================================
    def _on_start(self) -> None:
        if not self.presenter.is_active:
            self._sync_grid_shape()
        self.presenter.start_round()

    def _on_whack(self, index: int) -> None:
        self.presenter.whack(index)

    # ==================================================================
    # Score history
    # ==================================================================
    def _load_history(self) -> None:
        try:
            records = self.uc_load_history()
        except UseCaseError as exc:
            self._log.warning("Could not load score history: %s", exc.message)
            self.win.show_toast(f"Could not load score history: {exc.message}")
            records = []
        self.history_vm.set_records(records)
        self.game_vm.seed_best(self.history_vm.best_score)
        self._on_history_changed()

    def _on_history_changed(self) -> None:
        self.win.set_history_summary(self.history_vm.summary_text())
        if self._history_dialog is not None and self._history_dialog.winfo_exists():
            self._render_history(self._history_dialog)

    def _on_open_history(self) -> None:
        if self._history_dialog is not None and self._history_dialog.winfo_exists():
            self._history_dialog.lift()
            return
        dialog = ScoreHistoryDialog(
            self.win,
            on_refresh=self._load_history,
            on_close=self._on_history_closed,
        )
        self._history_dialog = dialog
        self._render_history(dialog)

    def _on_history_closed(self) -> None:
        self._history_dialog = None

    def _render_history(self, dialog: ScoreHistoryDialog) -> None:
        rounds, scores = self.history_vm.series()
        dialog.set_series(
            rounds,
            scores,
            best=self.history_vm.best_score,
            average=self.history_vm.average_score,
        )
        dialog.set_summary(self.history_vm.summary_text())

    # ==================================================================
    # Lifecycle
    # ==================================================================
    def _on_close(self) -> None:
        self.presenter.stop()

    def _report_callback_exception(self, exc_type, exc_value, exc_tb) -> None:
        self._log.error(
            "Unhandled error in Tk callback", exc_info=(exc_type, exc_value, exc_tb)
        )
        self.win.show_toast(f"Unexpected error: {exc_value}")


def main() -> None:
    app = App()
    app.win.mainloop()


if __name__ == "__main__":
    main()
