# tests/test_scheduler.py
from __future__ import annotations

from typing import List

import pytest

from tetris_sim.game.core.scheduler import CancelToken, ManualScheduler, PollingScheduler


def test_manual_scheduler_fires_once_per_interval() -> None:
    sched = ManualScheduler()
    calls: List[int] = []
    sched.schedule_repeating(1000, lambda: calls.append(sched.now_ms))

    assert sched.advance(999) == 0
    assert sched.advance(1501) == 2
    assert calls == [2500, 2500]
    assert sched.advance(500) == 1
    assert len(calls) == 3


def test_cancelled_timer_never_fires_again() -> None:
    sched = ManualScheduler()
    calls: List[int] = []
    token = sched.schedule_repeating(100, lambda: calls.append(1))
    sched.advance(100)
    token.cancel()

    assert token.cancelled
    assert sched.advance(1000) == 0
    assert calls == [1]
    assert sched.pending() == 0


def test_callback_may_cancel_itself_and_reschedule() -> None:
    sched = ManualScheduler()
    fired: List[str] = []
    tokens: List[CancelToken] = []

    def first() -> None:
        fired.append("first")
        tokens[0].cancel()
        tokens.append(sched.schedule_repeating(100, lambda: fired.append("second")))

    tokens.append(sched.schedule_repeating(100, first))

    sched.advance(100)
    assert fired == ["first"]
    assert sched.pending() == 1

    sched.advance(100)
    assert fired == ["first", "second"]


def test_timers_fire_in_due_order() -> None:
    sched = ManualScheduler()
    order: List[str] = []
    sched.schedule_repeating(300, lambda: order.append("slow"))
    sched.schedule_repeating(100, lambda: order.append("fast"))

    sched.advance(300)
    # Ties go to the timer scheduled first.
    assert order == ["fast", "fast", "slow", "fast"]


def test_invalid_arguments() -> None:
    sched = ManualScheduler()
    with pytest.raises(ValueError, match="interval_ms"):
        sched.schedule_repeating(0, lambda: None)
    with pytest.raises(ValueError, match="negative"):
        sched.advance(-1)


def test_polling_scheduler_uses_injected_clock() -> None:
    now = [0]
    sched = PollingScheduler(clock_ms=lambda: now[0])
    calls: List[int] = []
    sched.schedule_repeating(50, lambda: calls.append(now[0]))

    assert sched.poll() == 0
    now[0] = 49
    assert sched.poll() == 0
    now[0] = 120
    assert sched.poll() == 2
    assert calls == [120, 120]
