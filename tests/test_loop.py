# tests/test_loop.py
from __future__ import annotations

from typing import TYPE_CHECKING, List

import numpy as np
import pytest

from tetris_sim.game.core.game import TetrisGame
from tetris_sim.game.core.loop import GameLoop, normalize_command
from tetris_sim.game.core.pieceset import PieceCatalog
from tetris_sim.game.core.scheduler import ManualScheduler
from tetris_sim.game.core.types import Command, Phase, RenderEventKind

if TYPE_CHECKING:
    from conftest import RecordingGameOver, RecordingHook


def _fill_all_but_last_column(game: TetrisGame) -> None:
    # Leaves the active piece's own cells free; no row ends up full.
    assert game.active is not None
    own = set(game.active.cells())
    game.board.commit((r, c, "gray") for r in range(game.h) for c in range(game.w - 1) if (r, c) not in own)


def test_start_spawns_and_schedules_one_tick(loop: GameLoop, scheduler: ManualScheduler) -> None:
    assert not loop.running
    loop.start()
    assert loop.running
    assert loop.game.active is not None
    assert loop.game.phase is Phase.FALLING
    assert scheduler.pending() == 1

    loop.start()
    assert scheduler.pending() == 1


def test_tick_applies_gravity_and_counts_time(loop: GameLoop, scheduler: ManualScheduler, hook: RecordingHook) -> None:
    loop.start()
    hook.clear()

    scheduler.advance(1000)
    assert loop.game.active is not None and loop.game.active.row == 1
    assert loop.game.timer == 1
    assert hook.kinds() == [RenderEventKind.MOVE, RenderEventKind.TICK]

    scheduler.advance(999)
    assert loop.game.active.row == 1
    scheduler.advance(1)
    assert loop.game.active.row == 2
    assert loop.game.timer == 2


def test_advance_fires_once_per_elapsed_interval(loop: GameLoop, scheduler: ManualScheduler) -> None:
    loop.start()
    assert scheduler.advance(3000) == 3
    assert loop.game.timer == 3


def test_pause_suppresses_gravity_timer_and_commands(loop: GameLoop, scheduler: ManualScheduler) -> None:
    loop.start()
    assert loop.game.active is not None
    col, row = loop.game.active.col, loop.game.active.row

    assert loop.dispatch(Command.TOGGLE_PAUSE)
    assert loop.game.paused

    scheduler.advance(5000)
    assert loop.game.timer == 0
    assert loop.game.active.row == row

    shape = loop.game.active.shape
    for cmd in (Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.ROTATE, Command.SOFT_DROP, Command.HARD_DROP):
        assert not loop.dispatch(cmd)
    assert loop.game.active.shape is shape
    assert loop.game.active.row == row
    assert loop.game.active.col == col
    assert loop.game.board.is_empty()

    assert loop.dispatch("pause")
    assert not loop.game.paused
    scheduler.advance(1000)
    assert loop.game.timer == 1


def test_dispatch_accepts_names_and_rejects_unknown(loop: GameLoop) -> None:
    loop.start()
    assert loop.game.active is not None
    col = loop.game.active.col

    assert loop.dispatch("ArrowLeft")
    assert loop.game.active.col == col - 1
    assert loop.dispatch("right")
    assert loop.game.active.col == col

    before = loop.game.snapshot()
    assert not loop.dispatch("jump")
    assert not loop.dispatch(42)
    assert loop.game.snapshot().active is before.active


def test_hard_drop_command_locks_piece(loop: GameLoop) -> None:
    loop.start()
    assert loop.dispatch(Command.HARD_DROP)
    assert not loop.game.board.is_empty()
    assert loop.game.active is not None and loop.game.active.row == 0


def test_restart_is_idempotent(loop: GameLoop, scheduler: ManualScheduler) -> None:
    loop.start()
    loop.dispatch(Command.HARD_DROP)
    scheduler.advance(2000)
    loop.dispatch(Command.TOGGLE_PAUSE)

    for _ in range(2):
        snap = loop.restart()
        assert all(cell is None for row in snap.board for cell in row)
        assert (snap.score, snap.lives, snap.timer, snap.paused) == (0, 3, 0, False)
        assert snap.active is not None and snap.active.row == 0
        assert loop.running
        assert scheduler.pending() == 1

    assert loop.session_idx == 2


def test_restart_cancels_the_old_tick(loop: GameLoop, scheduler: ManualScheduler) -> None:
    loop.start()
    scheduler.advance(500)
    loop.restart()

    scheduler.advance(500)
    assert loop.game.timer == 0
    scheduler.advance(500)
    assert loop.game.timer == 1


def test_game_over_notifies_then_restarts(
        loop: GameLoop, scheduler: ManualScheduler, listener: RecordingGameOver, hook: RecordingHook
) -> None:
    loop.start()
    _fill_all_but_last_column(loop.game)
    hook.clear()

    assert loop.dispatch(Command.SOFT_DROP)

    assert len(listener.snapshots) == 1
    snap = listener.snapshots[0]
    assert snap.game_over
    assert all(row[9] is None for row in snap.board)
    assert all(cell is not None for row in snap.board for cell in row[:9])

    kinds = hook.kinds()
    assert kinds.index(RenderEventKind.GAME_OVER) < kinds.index(RenderEventKind.RESET)
    assert kinds[-1] is RenderEventKind.SPAWN

    assert loop.games_over == 1
    assert loop.game.board.is_empty()
    assert loop.game.phase is Phase.FALLING
    assert loop.running
    assert scheduler.pending() == 1


def test_game_over_during_tick_does_not_count_time(
        loop: GameLoop, scheduler: ManualScheduler, listener: RecordingGameOver
) -> None:
    loop.start()
    _fill_all_but_last_column(loop.game)

    scheduler.advance(1000)

    assert len(listener.snapshots) == 1
    assert loop.game.timer == 0
    assert scheduler.pending() == 1

    scheduler.advance(1000)
    assert loop.game.timer == 1
    assert len(listener.snapshots) == 1


def test_lives_are_a_readout_only(loop: GameLoop, listener: RecordingGameOver) -> None:
    loop.start()
    _fill_all_but_last_column(loop.game)
    loop.dispatch(Command.SOFT_DROP)
    assert listener.snapshots[0].lives == 3
    assert loop.game.lives == 3


def test_sessions_are_reproducible_with_same_rng_factory(catalog: PieceCatalog) -> None:
    def run() -> List[str]:
        game = TetrisGame(catalog=catalog)
        loop = GameLoop(
            game=game,
            scheduler=ManualScheduler(),
            rng_factory=lambda i: np.random.default_rng(1234 + i),
        )
        loop.start()
        kinds = []
        for _ in range(6):
            assert game.active is not None
            kinds.append(game.active.kind)
            loop.dispatch(Command.HARD_DROP)
        return kinds

    assert run() == run()


def test_start_raises_when_first_spawn_is_blocked(catalog: PieceCatalog) -> None:
    game = TetrisGame(height=4, width=4, spawn_col=0, catalog=catalog)
    loop = GameLoop(game=game, scheduler=ManualScheduler(), rng_factory=lambda i: np.random.default_rng(i))
    game.board.commit((0, c, "red") for c in range(4))
    with pytest.raises(ValueError, match="cannot spawn"):
        loop.start()
    assert not loop.running


def test_tick_ms_must_be_positive(game: TetrisGame) -> None:
    with pytest.raises(ValueError, match="tick_ms"):
        GameLoop(game=game, scheduler=ManualScheduler(), tick_ms=0)


@pytest.mark.parametrize(
    "raw,expected",
    [
        (Command.ROTATE, Command.ROTATE),
        ("ArrowLeft", Command.MOVE_LEFT),
        ("  RIGHT ", Command.MOVE_RIGHT),
        ("down", Command.SOFT_DROP),
        ("up", Command.ROTATE),
        ("Enter", Command.HARD_DROP),
        (" ", Command.TOGGLE_PAUSE),
        ("p-key", None),
        (None, None),
        (3, None),
    ],
)
def test_normalize_command(raw: object, expected: Command | None) -> None:
    assert normalize_command(raw) is expected
