from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

import pytest

from whack.app.round_presenter import RoundPresenter
from whack.domain.entities import HoleState, RoundPhase, ScoreRecord
from whack.domain.errors import ConfigError
from whack.domain.round_config import RoundConfig
from whack.domain.round_engine import RoundEngine
from whack.viewmodels.game_vm import GameVM
from whack.viewmodels.history_vm import HistoryVM
from whack.viewmodels.settings_vm import SettingsVM
from whack.viewmodels.status_format import HOLE_UP_COLOR, HOLE_UP_TEXT

CONFIG = RoundConfig(
    round_seconds=10,
    rows=1,
    cols=2,
    min_up_s=1.0,
    max_up_s=1.0,
    min_down_s=2.0,
    max_down_s=2.0,
    cooldown_s=3.0,
)


class WinStub:
    """Minimal window exposing the Tk timer API and a toast sink."""

    def __init__(self) -> None:
        self.pending: Dict[str, Callable[[], None]] = {}
        self.delays: List[int] = []
        self.cancelled: List[str] = []
        self.toasts: List[str] = []
        self._seq = 0

    def after(self, delay_ms: int, callback: Callable[[], None]) -> str:
        self._seq += 1
        token = f"after#{self._seq}"
        self.pending[token] = callback
        self.delays.append(delay_ms)
        return token

    def after_cancel(self, token: str) -> None:
        self.cancelled.append(token)
        self.pending.pop(token, None)

    def show_toast(self, message: str) -> None:
        self.toasts.append(message)

    def fire_next(self) -> None:
        token = next(iter(self.pending))
        self.pending.pop(token)()


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class MemoryStorage:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.records: List[ScoreRecord] = []

    def save_user_settings(self, payload: Dict) -> None:
        pass

    def load_user_settings(self) -> Optional[Dict]:
        return None

    def append_round_record(self, record: ScoreRecord) -> None:
        if self.fail:
            raise OSError("history file is read-only")
        self.records.append(record)

    def load_round_records(self) -> List[ScoreRecord]:
        return list(self.records)


@pytest.fixture
def harness():
    win = WinStub()
    clock = FakeClock()
    headers: List[Dict] = []
    hole_updates: List[Dict] = []
    storage = MemoryStorage()
    history_changes: List[int] = []
    game_vm = GameVM(on_update_header=headers.append, on_update_holes=hole_updates.append)
    history_vm = HistoryVM()
    presenter = RoundPresenter(
        win=win,
        game_vm=game_vm,
        settings_vm=SettingsVM(),
        history_vm=history_vm,
        storage=storage,
        engine_factory=lambda: RoundEngine(CONFIG),
        clock=clock,
        on_history_changed=lambda: history_changes.append(1),
    )
    return {
        "win": win,
        "clock": clock,
        "headers": headers,
        "holes": hole_updates,
        "storage": storage,
        "history_vm": history_vm,
        "history_changes": history_changes,
        "presenter": presenter,
    }


def _tick_at(h, now: float) -> None:
    h["clock"].now = now
    h["win"].fire_next()


def test_start_round_renders_and_schedules_tick(harness) -> None:
    presenter = harness["presenter"]

    assert presenter.start_round() is True

    assert presenter.is_active is True
    assert harness["win"].toasts[-1] == "Whack the moles!"
    assert harness["win"].delays == [100]
    assert harness["headers"][-1]["time"] == "10"
    assert harness["headers"][-1]["start_enabled"] is False
    assert harness["holes"][-1] == {
        0: (HOLE_UP_TEXT, HOLE_UP_COLOR),
        1: (HOLE_UP_TEXT, HOLE_UP_COLOR),
    }


def test_start_round_while_active_is_rejected(harness) -> None:
    presenter = harness["presenter"]
    presenter.start_round()

    assert presenter.start_round() is False
    assert harness["win"].toasts[-1] == "A round is already in progress."
    assert len(harness["win"].pending) == 1


def test_whack_updates_score(harness) -> None:
    presenter = harness["presenter"]
    presenter.start_round()
    harness["clock"].now = 0.4

    assert presenter.whack(1) is True
    assert presenter.whack(1) is False
    assert harness["headers"][-1]["score"] == "1"
    assert presenter.engine.hole_state(1) is HoleState.HIT


def test_whack_before_any_round_is_ignored(harness) -> None:
    assert harness["presenter"].whack(0) is False
    assert harness["win"].toasts == []


def test_invalid_hole_is_reported(harness) -> None:
    presenter = harness["presenter"]
    presenter.start_round()

    assert presenter.whack(7) is False
    assert "outside" in harness["win"].toasts[-1]


def test_full_round_cycle_records_score(harness) -> None:
    presenter = harness["presenter"]
    win = harness["win"]
    presenter.start_round()
    harness["clock"].now = 0.5
    presenter.whack(0)

    _tick_at(harness, 5.5)
    assert harness["headers"][-1]["time"] == "5"

    _tick_at(harness, 10.0)
    assert win.toasts[-1] == "Time's up! Score: 1"
    assert [r.score for r in harness["storage"].records] == [1]
    assert [r.score for r in harness["history_vm"].records] == [1]
    assert harness["history_changes"] == [1]
    assert presenter.engine.phase is RoundPhase.COOLDOWN
    assert harness["headers"][-1]["start_enabled"] is False
    assert len(win.pending) == 1

    _tick_at(harness, 13.0)
    assert presenter.is_active is False
    assert harness["headers"][-1]["start_enabled"] is True
    assert harness["headers"][-1]["time"] == ""
    assert win.pending == {}


def test_beating_stored_best_is_announced(harness) -> None:
    harness["history_vm"].set_records(
        [
            ScoreRecord(
                finished_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
                score=1,
                pops=8,
                round_seconds=10,
                hole_count=2,
            )
        ]
    )
    presenter = harness["presenter"]
    presenter.start_round()
    harness["clock"].now = 0.5
    presenter.whack(0)
    presenter.whack(1)

    _tick_at(harness, 10.0)

    assert harness["win"].toasts[-1] == "Time's up! Score: 2 (new best)"


def test_late_tick_finishes_and_stops_in_one_step(harness) -> None:
    presenter = harness["presenter"]
    presenter.start_round()

    _tick_at(harness, 60.0)

    assert harness["win"].toasts[-1] == "Time's up! Score: 0"
    assert presenter.is_active is False
    assert harness["win"].pending == {}


def test_save_failure_keeps_playing(harness) -> None:
    harness["storage"].fail = True
    presenter = harness["presenter"]
    presenter.start_round()

    _tick_at(harness, 10.0)

    assert harness["win"].toasts[-1].startswith("Time's up! Score: 0. Could not save score:")
    assert harness["history_vm"].records == []
    assert harness["history_changes"] == []
    assert len(harness["win"].pending) == 1


def test_new_round_after_cooldown_uses_fresh_engine(harness) -> None:
    presenter = harness["presenter"]
    presenter.start_round()
    first = presenter.engine
    _tick_at(harness, 13.0)

    assert presenter.start_round() is True
    assert presenter.engine is not first


def test_stop_cancels_pending_tick(harness) -> None:
    presenter = harness["presenter"]
    presenter.start_round()

    presenter.stop()

    assert harness["win"].pending == {}
    assert harness["win"].cancelled == ["after#1"]


def test_invalid_settings_are_reported() -> None:
    win = WinStub()

    def broken_factory() -> RoundEngine:
        raise ConfigError("min_up_s must not exceed max_up_s.")

    presenter = RoundPresenter(
        win=win,
        game_vm=GameVM(),
        settings_vm=SettingsVM(),
        history_vm=HistoryVM(),
        storage=MemoryStorage(),
        engine_factory=broken_factory,
        clock=FakeClock(),
    )

    assert presenter.start_round() is False
    assert win.toasts == ["Invalid settings: min_up_s must not exceed max_up_s."]
    assert win.pending == {}


def test_default_factory_follows_settings() -> None:
    settings = SettingsVM()
    settings.apply_dict({"rows": 2, "cols": 3, "tick_ms": 40})
    win = WinStub()
    presenter = RoundPresenter(
        win=win,
        game_vm=GameVM(),
        settings_vm=settings,
        history_vm=HistoryVM(),
        storage=MemoryStorage(),
        clock=FakeClock(),
    )

    presenter.start_round()

    assert presenter.engine.config.hole_count == 6
    assert win.delays == [40]
