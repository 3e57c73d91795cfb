# tests/conftest.py
from __future__ import annotations

from typing import List

import numpy as np
import pytest

from tetris_sim.game.core.game import TetrisGame
from tetris_sim.game.core.loop import GameLoop
from tetris_sim.game.core.pieceset import PieceCatalog
from tetris_sim.game.core.scheduler import ManualScheduler
from tetris_sim.game.core.types import RenderEvent, RenderEventKind, Snapshot


class RecordingHook:
    def __init__(self) -> None:
        self.events: List[RenderEvent] = []

    def __call__(self, event: RenderEvent) -> None:
        self.events.append(event)

    def kinds(self) -> List[RenderEventKind]:
        return [e.kind for e in self.events]

    def clear(self) -> None:
        self.events.clear()


class RecordingGameOver:
    def __init__(self) -> None:
        self.snapshots: List[Snapshot] = []

    def __call__(self, snap: Snapshot) -> None:
        self.snapshots.append(snap)


@pytest.fixture(scope="session")
def catalog() -> PieceCatalog:
    return PieceCatalog.classic7()


@pytest.fixture
def hook() -> RecordingHook:
    return RecordingHook()


@pytest.fixture
def game(catalog: PieceCatalog, hook: RecordingHook) -> TetrisGame:
    g = TetrisGame(catalog=catalog, render_hook=hook)
    g.set_rng(np.random.default_rng(7))
    return g


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def listener() -> RecordingGameOver:
    return RecordingGameOver()


@pytest.fixture
def loop(game: TetrisGame, scheduler: ManualScheduler, listener: RecordingGameOver) -> GameLoop:
    return GameLoop(
        game=game,
        scheduler=scheduler,
        tick_ms=1000,
        on_game_over=listener,
        rng_factory=lambda i: np.random.default_rng(100 + i),
    )
