# src/tetris_sim/game/core/loop.py
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import numpy as np

from tetris_sim.game.core.constants import TICK_MS
from tetris_sim.game.core.game import TetrisGame
from tetris_sim.game.core.scheduler import CancelToken, Scheduler
from tetris_sim.game.core.types import Command, GameOverListener, RenderEventKind, Snapshot

_COMMAND_ALIASES: dict[str, Command] = {
    "left": Command.MOVE_LEFT,
    "move_left": Command.MOVE_LEFT,
    "arrowleft": Command.MOVE_LEFT,
    "right": Command.MOVE_RIGHT,
    "move_right": Command.MOVE_RIGHT,
    "arrowright": Command.MOVE_RIGHT,
    "down": Command.SOFT_DROP,
    "soft_drop": Command.SOFT_DROP,
    "arrowdown": Command.SOFT_DROP,
    "rotate": Command.ROTATE,
    "rot_cw": Command.ROTATE,
    "up": Command.ROTATE,
    "arrowup": Command.ROTATE,
    "hard_drop": Command.HARD_DROP,
    "drop": Command.HARD_DROP,
    "enter": Command.HARD_DROP,
    "pause": Command.TOGGLE_PAUSE,
    "toggle_pause": Command.TOGGLE_PAUSE,
    " ": Command.TOGGLE_PAUSE,
}


def normalize_command(command: Any) -> Optional[Command]:
    """
    Map a Command or a command/key name to a Command. Unknown input => None.
    """
    if isinstance(command, Command):
        return command
    if not isinstance(command, str):
        return None
    s = command if command == " " else command.strip().lower()
    return _COMMAND_ALIASES.get(s)


class GameLoop:
    """
    Clock + input dispatch around one TetrisGame.

    Contracts:
      - One repeating tick of tick_ms drives gravity. A paused tick is a no-op
        (no gravity, no timer increment).
      - While paused every command except TOGGLE_PAUSE is rejected.
      - restart() and game_over() cancel the tick schedule BEFORE touching state,
        so no stale tick can run against a freshly reset session.
      - game_over(): render hook GAME_OVER -> listener (may block) -> restart().
    """

    def __init__(
            self,
            *,
            game: TetrisGame,
            scheduler: Scheduler,
            tick_ms: int = TICK_MS,
            on_game_over: GameOverListener | None = None,
            rng_factory: Callable[[int], np.random.Generator] | None = None,
            logger: logging.Logger | None = None,
    ) -> None:
        self.game = game
        self.scheduler = scheduler
        self.tick_ms = int(tick_ms)
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")

        self.on_game_over = on_game_over
        self._rng_factory = rng_factory
        self.logger = logger or logging.getLogger("tetris_sim.loop")

        self._token: CancelToken | None = None
        self.session_idx = 0
        self.games_over = 0

        if self._rng_factory is not None:
            self.game.set_rng(self._rng_factory(self.session_idx))

    # ---- clock ---------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._token is not None and not self._token.cancelled

    def start(self) -> None:
        """
        Spawn the first piece if needed and start ticking. No-op when already running.
        """
        if self.running:
            return
        if self.game.active is None and not self.game.game_over:
            if not self.game.spawn_next():
                raise ValueError(
                    f"cannot spawn a piece on board {self.game.h}x{self.game.w} at column {self.game.spawn_col}"
                )
        self._token = self.scheduler.schedule_repeating(self.tick_ms, self.tick)
        self.logger.debug("[loop] started tick_ms=%d session=%d", self.tick_ms, self.session_idx)

    def stop(self) -> None:
        if self._token is not None:
            self._token.cancel()
            self._token = None

    def tick(self) -> None:
        """
        Gravity tick: one row down, then timer += 1.
        """
        if self.game.paused or self.game.game_over:
            return
        self.game.move(1, 0)
        if self.game.game_over:
            # The session was restarted inside this tick; do not count it.
            self.game_over()
            return
        self.game.session.timer += 1
        self.game.emit(RenderEventKind.TICK)

    # ---- input ---------------------------------------------------------------------

    def dispatch(self, command: Any) -> bool:
        """
        Apply one input command. Returns False when it was rejected (paused, unknown, game over).
        """
        cmd = normalize_command(command)
        if cmd is None:
            self.logger.debug("[loop] ignoring unknown command %r", command)
            return False

        if cmd is Command.TOGGLE_PAUSE:
            self.toggle_pause()
            return True

        if self.game.paused or self.game.game_over:
            return False

        if cmd is Command.MOVE_LEFT:
            self.game.move(0, -1)
        elif cmd is Command.MOVE_RIGHT:
            self.game.move(0, +1)
        elif cmd is Command.SOFT_DROP:
            self.game.move(1, 0)
        elif cmd is Command.ROTATE:
            self.game.rotate()
        elif cmd is Command.HARD_DROP:
            self.game.hard_drop()

        if self.game.game_over:
            self.game_over()
        return True

    def toggle_pause(self) -> bool:
        self.game.session.paused = not self.game.session.paused
        self.game.emit(RenderEventKind.PAUSE)
        self.logger.info("[loop] %s", "paused" if self.game.paused else "resumed")
        return self.game.paused

    # ---- session -------------------------------------------------------------------

    def restart(self) -> Snapshot:
        """
        Cancel the clock, reset board and session, spawn and restart the clock.
        """
        self.stop()
        self.session_idx += 1
        if self._rng_factory is not None:
            self.game.set_rng(self._rng_factory(self.session_idx))
        self.game.reset()
        self.start()
        self.logger.info("[loop] restart session=%d", self.session_idx)
        return self.game.snapshot()

    def game_over(self) -> None:
        self.stop()
        self.games_over += 1
        snap = self.game.emit(RenderEventKind.GAME_OVER)
        self.logger.info("[loop] game over score=%d timer=%d", snap.score, snap.timer)
        if self.on_game_over is not None:
            self.on_game_over(snap)
        self.restart()
