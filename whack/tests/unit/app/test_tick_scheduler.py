from __future__ import annotations

from typing import Callable, Dict, List

from whack.app.tick_scheduler import TickScheduler


class AfterStub:
    def __init__(self) -> None:
        self.pending: Dict[str, Callable[[], None]] = {}
        self.delays: List[int] = []
        self.cancelled: List[str] = []
        self._seq = 0

    def after(self, delay_ms: int, callback: Callable[[], None]) -> str:
        self._seq += 1
        token = f"after#{self._seq}"
        self.pending[token] = callback
        self.delays.append(delay_ms)
        return token

    def after_cancel(self, token: str) -> None:
        self.cancelled.append(token)
        if token not in self.pending:
            raise ValueError(f"unknown token {token}")
        del self.pending[token]

    def fire(self, token: str) -> None:
        self.pending.pop(token)()


def test_schedule_tracks_one_handle_per_channel() -> None:
    stub = AfterStub()
    sched = TickScheduler(stub.after, stub.after_cancel)

    sched.schedule("round", 100, lambda: None)
    sched.schedule("round", 100, lambda: None)

    assert stub.cancelled == ["after#1"]
    assert list(stub.pending) == ["after#2"]


def test_delay_is_clamped_to_one_millisecond() -> None:
    stub = AfterStub()
    sched = TickScheduler(stub.after, stub.after_cancel)

    sched.schedule("round", 0, lambda: None)

    assert stub.delays == [1]


def test_fired_callback_can_reschedule_itself() -> None:
    stub = AfterStub()
    sched = TickScheduler(stub.after, stub.after_cancel)
    calls: List[int] = []

    def tick() -> None:
        calls.append(1)
        if len(calls) < 3:
            sched.schedule("round", 10, tick)

    sched.schedule("round", 10, tick)
    while stub.pending:
        stub.fire(next(iter(stub.pending)))

    assert len(calls) == 3
    assert stub.cancelled == []
    sched.cancel_all()
    assert stub.cancelled == []


def test_cancel_all_swallows_stale_tokens() -> None:
    stub = AfterStub()
    sched = TickScheduler(stub.after, stub.after_cancel)
    sched.schedule("round", 10, lambda: None)
    sched.schedule("other", 10, lambda: None)
    stub.pending.clear()

    sched.cancel_all()

    assert sorted(stub.cancelled) == ["after#1", "after#2"]
    sched.cancel_all()
    assert len(stub.cancelled) == 2
