# src/tetris_sim/game/core/scheduler.py
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List


class CancelToken:
    """
    Handle returned by schedule_repeating(); cancel() stops further callbacks.
    """

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class Scheduler(ABC):
    @abstractmethod
    def schedule_repeating(self, interval_ms: int, callback: Callable[[], None]) -> CancelToken:
        raise NotImplementedError


@dataclass
class _Timer:
    interval_ms: int
    callback: Callable[[], None]
    due_ms: int
    token: CancelToken


@dataclass
class PollingScheduler(Scheduler):
    """
    Repeating timers driven by an external frame loop.

    The owner calls poll() regularly; every timer whose due time has passed fires,
    once per elapsed interval, in due-time order. Callbacks may cancel timers or
    schedule new ones while polling.

    clock_ms: monotonic millisecond clock (e.g. pygame.time.get_ticks).
    """

    clock_ms: Callable[[], int] = field(default=lambda: int(time.monotonic() * 1000.0))
    _timers: List[_Timer] = field(default_factory=list)

    def schedule_repeating(self, interval_ms: int, callback: Callable[[], None]) -> CancelToken:
        iv = int(interval_ms)
        if iv <= 0:
            raise ValueError(f"interval_ms must be positive, got {iv}")
        token = CancelToken()
        self._timers.append(_Timer(interval_ms=iv, callback=callback, due_ms=int(self.clock_ms()) + iv, token=token))
        return token

    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.token.cancelled)

    def poll(self) -> int:
        """
        Fire all due callbacks. Returns how many callbacks ran.
        """
        now = int(self.clock_ms())
        fired = 0
        while True:
            self._timers = [t for t in self._timers if not t.token.cancelled]
            due = [t for t in self._timers if t.due_ms <= now]
            if not due:
                return fired
            t = min(due, key=lambda x: x.due_ms)
            t.due_ms += t.interval_ms
            t.callback()
            fired += 1


class ManualScheduler(PollingScheduler):
    """
    Scheduler with a hand-driven clock, for tests and headless runs.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        super().__init__(clock_ms=lambda: self.now_ms)

    def advance(self, ms: int) -> int:
        """
        Move the clock forward by ms and fire everything that became due.
        """
        if int(ms) < 0:
            raise ValueError(f"cannot advance by a negative amount: {ms}")
        self.now_ms += int(ms)
        return self.poll()


__all__ = ["CancelToken", "Scheduler", "PollingScheduler", "ManualScheduler"]
