"""Presenter that drives a round on the Tk event loop.

One scheduler tick advances the engine, the resulting snapshot flows through
``GameVM`` into the views, and a finished round is recorded in the score
history. Clicks on mole buttons are routed through ``WhackHole``. Nothing in
this module touches Tk directly; the window only needs ``after``,
``after_cancel`` and ``show_toast``.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from ..domain.entities import HoleIndex, RoundPhase, RoundResult
from ..domain.errors import ConfigError
from ..domain.ports import Clock, StoragePort, UseCaseError
from ..domain.round_engine import RoundEngine
from ..usecases.advance_round import AdvanceRound
from ..usecases.record_round_result import RecordRoundResult
from ..usecases.start_round import StartRound
from ..usecases.whack_hole import WhackHole
from ..viewmodels.game_vm import GameVM
from ..viewmodels.history_vm import HistoryVM
from ..viewmodels.settings_vm import SettingsVM
from .tick_scheduler import TickScheduler

EngineFactory = Callable[[], RoundEngine]


class RoundPresenter:
    """Own the round lifecycle between the start button and the score history."""

    CHANNEL = "round"

    def __init__(
        self,
        *,
        win,
        game_vm: GameVM,
        settings_vm: SettingsVM,
        history_vm: HistoryVM,
        storage: StoragePort,
        engine_factory: Optional[EngineFactory] = None,
        clock: Clock = time.monotonic,
        on_history_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.win = win
        self.game_vm = game_vm
        self.settings_vm = settings_vm
        self.history_vm = history_vm
        self._engine_factory = engine_factory or self._engine_from_settings
        self._clock = clock
        self._on_history_changed = on_history_changed

        self._scheduler = TickScheduler(win.after, win.after_cancel)
        self._uc_record = RecordRoundResult(storage)
        self._engine: Optional[RoundEngine] = None
        self._uc_advance: Optional[AdvanceRound] = None
        self._uc_whack: Optional[WhackHole] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def engine(self) -> Optional[RoundEngine]:
        return self._engine

    @property
    def is_active(self) -> bool:
        """True while a round or its cooldown is in progress."""
        return self._engine is not None and self._engine.phase is not RoundPhase.IDLE

    def start_round(self) -> bool:
        """Start a fresh round using the current settings."""
        if self.is_active:
            self.win.show_toast("A round is already in progress.")
            return False
        try:
            engine = self._engine_factory()
        except ConfigError as exc:
            self._log.warning("Invalid round settings: %s", exc)
            self.win.show_toast(f"Invalid settings: {exc}")
            return False

        try:
            snapshot = StartRound(engine, self._clock)()
        except UseCaseError as exc:
            self._toast_error(exc)
            return False

        self._engine = engine
        self._uc_advance = AdvanceRound(engine, self._clock)
        self._uc_whack = WhackHole(engine, self._clock)
        self.game_vm.apply_snapshot(snapshot)
        self.win.show_toast("Whack the moles!")
        self._schedule_tick()
        return True

    def whack(self, index: HoleIndex) -> bool:
        """Forward a mole-button click; returns True when it scored."""
        if self._uc_whack is None or self._engine is None:
            return False
        try:
            hit = self._uc_whack(index)
        except UseCaseError as exc:
            self._toast_error(exc)
            return False
        if hit:
            self.game_vm.apply_snapshot(self._engine.snapshot())
        return hit

    def stop(self) -> None:
        """Cancel pending ticks (used on window close)."""
        self._scheduler.cancel_all()

    # ------------------------------------------------------------------
    # Tick loop
    # ------------------------------------------------------------------
    def _schedule_tick(self) -> None:
        self._scheduler.schedule(self.CHANNEL, self.settings_vm.tick_ms, self._on_tick)

    def _on_tick(self) -> None:
        if self._uc_advance is None:
            return
        try:
            tick = self._uc_advance()
        except UseCaseError as exc:
            self._toast_error(exc)
            self.stop()
            return

        self.game_vm.apply_snapshot(tick.snapshot)
        if tick.finished is not None:
            self._on_round_finished(tick.finished)
        if tick.snapshot.phase is RoundPhase.IDLE:
            self._log.debug("Round cycle complete; tick loop stopped")
            return
        self._schedule_tick()

    def _on_round_finished(self, result: RoundResult) -> None:
        previous_best = self.history_vm.best_score
        self.game_vm.note_result(result)
        message = f"Time's up! Score: {result.score}"
        if previous_best is not None and result.score > previous_best:
            message += " (new best)"

        try:
            record = self._uc_record(result)
        except UseCaseError as exc:
            self._log.warning("Could not save round result: %s", exc.message)
            self.win.show_toast(f"{message}. Could not save score: {exc.message}")
            return

        self.history_vm.add_record(record)
        if self._on_history_changed:
            self._on_history_changed()
        self.win.show_toast(message)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _engine_from_settings(self) -> RoundEngine:
        return RoundEngine(self.settings_vm.to_round_config())

    def _toast_error(self, err: UseCaseError) -> None:
        self._log.error("%s: %s", err.code, err.message)
        self.win.show_toast(err.message)


__all__ = ["RoundPresenter"]
