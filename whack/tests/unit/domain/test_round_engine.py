from __future__ import annotations

import random

import pytest

from whack.domain.entities import HoleState, RoundPhase
from whack.domain.errors import HoleIndexError, RoundStateError
from whack.domain.round_config import RoundConfig
from whack.domain.round_engine import RoundEngine

# Fixed ranges make every up period 1s and every down period 2s, so each hole
# is up at [0,1), [3,4), [6,7), [9,10) during a 10s round started at t=0.
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


def _started_engine(now: float = 0.0) -> RoundEngine:
    engine = RoundEngine(CONFIG)
    engine.start(now)
    return engine


def test_idle_snapshot_has_blank_counters() -> None:
    snap = RoundEngine(CONFIG).snapshot()

    assert snap.phase is RoundPhase.IDLE
    assert snap.remaining_s is None
    assert snap.score is None
    assert snap.holes == (HoleState.DOWN, HoleState.DOWN)


def test_start_pops_every_mole() -> None:
    engine = RoundEngine(CONFIG)
    snap = engine.start(0.0)

    assert snap.phase is RoundPhase.RUNNING
    assert snap.remaining_s == 10
    assert snap.score == 0
    assert snap.holes == (HoleState.UP, HoleState.UP)
    assert engine.pops == 2
    assert engine.ends_at == pytest.approx(10.0)


def test_advance_applies_due_transitions_only() -> None:
    engine = _started_engine()

    tick = engine.advance(0.5)
    assert tick.changed == ()
    assert tick.snapshot.holes == (HoleState.UP, HoleState.UP)
    assert tick.snapshot.remaining_s == 10

    tick = engine.advance(1.0)
    assert tick.changed == (0, 1)
    assert tick.snapshot.holes == (HoleState.DOWN, HoleState.DOWN)
    assert tick.snapshot.remaining_s == 9

    tick = engine.advance(3.0)
    assert tick.snapshot.holes == (HoleState.UP, HoleState.UP)
    assert engine.pops == 4
    assert tick.finished is None


def test_late_tick_catches_up_on_missed_transitions() -> None:
    engine = _started_engine()

    tick = engine.advance(5.5)

    # Up at 0, down at 1, up at 3, down at 4; next rise is due at 6.
    assert tick.snapshot.holes == (HoleState.DOWN, HoleState.DOWN)
    assert tick.changed == (0, 1)
    assert engine.pops == 4
    assert tick.snapshot.remaining_s == 5


def test_whack_scores_once_per_raised_mole() -> None:
    engine = _started_engine()

    assert engine.whack(0, 0.2) is True
    assert engine.whack(0, 0.3) is False
    assert engine.hole_state(0) is HoleState.HIT
    assert engine.snapshot().score == 1

    tick = engine.advance(1.0)
    assert 0 in tick.changed
    assert engine.hole_state(0) is HoleState.DOWN


def test_whack_on_empty_hole_is_ignored() -> None:
    engine = _started_engine()
    engine.advance(1.5)

    assert engine.whack(1, 1.5) is False
    assert engine.score == 0


def test_whack_after_time_is_up_is_ignored_before_tick() -> None:
    engine = _started_engine()
    engine.advance(9.5)

    assert engine.phase is RoundPhase.RUNNING
    assert engine.whack(0, 10.0) is False
    assert engine.score == 0


def test_round_ends_with_result_and_all_holes_down() -> None:
    engine = _started_engine()
    engine.advance(9.5)
    assert engine.whack(1, 9.5) is True

    tick = engine.advance(10.0)

    assert tick.finished is not None
    assert tick.finished.score == 1
    assert tick.finished.pops == 8
    assert tick.finished.round_seconds == 10
    assert tick.finished.hole_count == 2
    assert tick.changed == (0, 1)
    assert tick.snapshot.phase is RoundPhase.COOLDOWN
    assert tick.snapshot.remaining_s == 0
    assert tick.snapshot.score == 1
    assert tick.snapshot.holes == (HoleState.DOWN, HoleState.DOWN)

    # Only the advance that ended the round reports the result.
    assert engine.advance(10.5).finished is None


def test_cooldown_blocks_whacks_then_returns_to_idle() -> None:
    engine = _started_engine()
    engine.advance(10.0)

    assert engine.whack(0, 11.0) is False
    assert engine.advance(12.9).snapshot.phase is RoundPhase.COOLDOWN

    snap = engine.advance(13.0).snapshot
    assert snap.phase is RoundPhase.IDLE
    assert snap.remaining_s is None
    assert snap.score is None

    restarted = engine.start(13.0)
    assert restarted.phase is RoundPhase.RUNNING
    assert restarted.score == 0


def test_single_late_tick_can_finish_and_leave_cooldown() -> None:
    engine = _started_engine()

    tick = engine.advance(50.0)

    assert tick.finished is not None
    assert tick.finished.pops == 8
    assert tick.snapshot.phase is RoundPhase.IDLE


def test_start_is_rejected_while_running_or_cooling_down() -> None:
    engine = _started_engine()
    with pytest.raises(RoundStateError):
        engine.start(1.0)

    engine.advance(10.0)
    with pytest.raises(RoundStateError):
        engine.start(11.0)


@pytest.mark.parametrize("index", [-1, 2, True, "0", 1.0])
def test_whack_rejects_invalid_hole_index(index) -> None:
    engine = _started_engine()

    with pytest.raises(HoleIndexError):
        engine.whack(index, 0.1)


def test_hole_index_error_is_an_index_error() -> None:
    with pytest.raises(IndexError):
        RoundEngine(CONFIG).hole_state(5)


def test_engine_time_never_runs_backwards() -> None:
    engine = _started_engine()
    assert engine.advance(3.5).snapshot.remaining_s == 7

    tick = engine.advance(2.0)

    assert tick.changed == ()
    assert tick.snapshot.remaining_s == 7


def test_default_config_round_with_seeded_rng() -> None:
    engine = RoundEngine(rng=random.Random(7))
    engine.start(0.0)
    finished = None
    t = 0.0
    while finished is None:
        t = round(t + 0.1, 1)
        tick = engine.advance(t)
        holes = tick.snapshot.holes
        assert len(holes) == 20
        assert HoleState.HIT not in holes
        finished = tick.finished

    assert t == pytest.approx(20.0)
    assert finished.score == 0
    assert finished.pops >= 20
    assert finished.hole_count == 20
