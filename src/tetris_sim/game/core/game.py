# src/tetris_sim/game/core/game.py
from __future__ import annotations

from typing import List, Optional

import numpy as np

from tetris_sim.game.core.board import Board
from tetris_sim.game.core.constants import BOARD_HEIGHT, BOARD_WIDTH, INITIAL_LIVES
from tetris_sim.game.core.piece_rules import PieceRule, UniformPieceRule
from tetris_sim.game.core.pieceset import PieceCatalog, PieceTemplate, freeze
from tetris_sim.game.core.rotation import collides, try_rotate
from tetris_sim.game.core.rules import ScoreConfig, resolve_lines, score_for_clears
from tetris_sim.game.core.types import (
    ActivePiece,
    Phase,
    RenderEvent,
    RenderEventKind,
    RenderHook,
    SessionState,
    Snapshot,
)


def default_spawn_col(width: int) -> int:
    # Left of center: 4 on the classic 10-wide board.
    return max(0, int(width) // 2 - 1)


def check_spawn_fits(catalog: PieceCatalog, *, height: int, width: int, spawn_col: int) -> None:
    """
    Raise ValueError unless every template fits an empty board when spawned at (0, spawn_col).
    """
    for kind in catalog.kinds():
        rows, cols = catalog.shape(kind).shape
        if rows > height or cols > width - spawn_col:
            raise ValueError(
                f"piece {kind!r} ({rows}x{cols}) does not fit a {height}x{width} board at spawn column {spawn_col}"
            )


class TetrisGame:
    """
    Piece/grid simulation: the authoritative board, the falling piece and the session readout.

    Contracts:

      - board is the LOCKED board; the active piece is never written into it until lock.
      - Phases: SPAWNING -> FALLING -> LOCKING -> FALLING (respawn), terminal GAME_OVER.
        Piece operations are no-ops outside FALLING.
      - A failed spawn sets GAME_OVER and leaves the board untouched. Handling it
        (notify + restart) is the caller's job, see GameLoop.
      - Every mutating operation notifies the render hooks synchronously with a Snapshot.
      - Callers that need deterministic pieces inject an RNG via set_rng() before reset().
    """

    def __init__(
            self,
            *,
            height: int = BOARD_HEIGHT,
            width: int = BOARD_WIDTH,
            catalog: Optional[PieceCatalog] = None,
            piece_rule: PieceRule | None = None,
            score_cfg: ScoreConfig | None = None,
            initial_lives: int = INITIAL_LIVES,
            spawn_col: Optional[int] = None,
            render_hook: RenderHook | None = None,
    ) -> None:
        self.h = int(height)
        self.w = int(width)
        if self.h <= 0:
            raise ValueError(f"height must be positive, got {self.h}")
        if self.w <= 0:
            raise ValueError(f"width must be positive, got {self.w}")

        self.initial_lives = int(initial_lives)
        if self.initial_lives < 0:
            raise ValueError(f"initial_lives must be >= 0, got {self.initial_lives}")

        self.spawn_col = int(spawn_col) if spawn_col is not None else default_spawn_col(self.w)
        if not 0 <= self.spawn_col < self.w:
            raise ValueError(f"spawn_col must be in [0, {self.w}), got {self.spawn_col}")

        self.catalog = catalog or PieceCatalog.classic7()
        if not self.catalog.kinds():
            raise ValueError("PieceCatalog has no kinds (empty catalog is invalid).")
        check_spawn_fits(self.catalog, height=self.h, width=self.w, spawn_col=self.spawn_col)

        self.board = Board.empty(h=self.h, w=self.w)
        self.score_cfg = score_cfg or ScoreConfig()
        self.session = SessionState(lives=self.initial_lives)
        self.phase = Phase.SPAWNING
        self.active: Optional[ActivePiece] = None

        # Placeholder generator for standalone usage; the loop/factory injects a seeded one.
        self._rng: np.random.Generator = np.random.default_rng()
        self._piece_rule: PieceRule = piece_rule or UniformPieceRule()
        self._piece_rule.reset(rng=self._rng, kinds=self.catalog.kinds())

        self._render_hooks: List[RenderHook] = []
        if render_hook is not None:
            self._render_hooks.append(render_hook)

    # ---- wiring --------------------------------------------------------------------

    def set_rng(self, rng: np.random.Generator) -> None:
        self._rng = rng
        self._piece_rule.reset(rng=self._rng, kinds=self.catalog.kinds())

    def add_render_hook(self, hook: RenderHook) -> None:
        self._render_hooks.append(hook)

    # ---- session readout -----------------------------------------------------------

    @property
    def score(self) -> int:
        return int(self.session.score)

    @property
    def lives(self) -> int:
        return int(self.session.lives)

    @property
    def timer(self) -> int:
        return int(self.session.timer)

    @property
    def paused(self) -> bool:
        return bool(self.session.paused)

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    # ---- lifecycle -----------------------------------------------------------------

    def reset(self) -> Snapshot:
        """
        Empty board, initial session values, no active piece. Does not spawn.
        """
        self.board.reset()
        self.session = SessionState(lives=self.initial_lives)
        self.phase = Phase.SPAWNING
        self.active = None
        self._piece_rule.reset(rng=self._rng, kinds=self.catalog.kinds())
        return self.emit(RenderEventKind.RESET)

    def spawn_next(self) -> bool:
        kind = self._piece_rule.next_piece()
        return self.spawn(self.catalog.get(kind))

    def spawn(self, template: PieceTemplate) -> bool:
        self.phase = Phase.SPAWNING
        ap = ActivePiece(
            kind=template.kind,
            shape=freeze(template.shape),
            color=template.color,
            row=0,
            col=self.spawn_col,
        )
        self.active = ap
        if self.check_collision(ap.shape, ap.row, ap.col):
            self.phase = Phase.GAME_OVER
            return False
        self.phase = Phase.FALLING
        self.emit(RenderEventKind.SPAWN)
        return True

    # ---- piece operations ----------------------------------------------------------

    def check_collision(self, shape: np.ndarray, row: int, col: int) -> bool:
        return collides(board=self.board, shape=shape, row=int(row), col=int(col))

    def move(self, d_row: int, d_col: int) -> bool:
        """
        Translate the active piece by (d_row, d_col).

        A rejected pure downward step (1, 0) locks the piece, resolves lines and
        spawns the next one. Other rejections change nothing.
        """
        if self.phase is not Phase.FALLING or self.active is None:
            return False

        cand = self.active.moved(d_row=int(d_row), d_col=int(d_col))
        if self.check_collision(cand.shape, cand.row, cand.col):
            if (int(d_row), int(d_col)) == (1, 0):
                self._lock_and_advance()
            return False

        self.active = cand
        self.emit(RenderEventKind.MOVE)
        return True

    def rotate(self) -> bool:
        if self.phase is not Phase.FALLING or self.active is None:
            return False

        ap = self.active
        new_shape = try_rotate(board=self.board, shape=ap.shape, row=ap.row, col=ap.col)
        if new_shape is ap.shape:
            return False

        self.active = ap.with_shape(new_shape)
        self.emit(RenderEventKind.ROTATE)
        return True

    def hard_drop(self) -> int:
        """
        Drop to the lowest non-colliding row and lock once there.

        Returns the number of rows dropped.
        """
        if self.phase is not Phase.FALLING or self.active is None:
            return 0

        ap = self.active
        dropped = 0
        # Bounded by board height: the floor always collides.
        while not self.check_collision(ap.shape, ap.row + dropped + 1, ap.col):
            dropped += 1

        self.active = ap.moved(d_row=dropped, d_col=0)
        self._lock_and_advance()
        return dropped

    def lock(self) -> None:
        ap = self.active
        if ap is None:
            return
        self.board.commit((r, c, ap.color) for r, c in ap.cells() if r >= 0)

    # ---- internals -----------------------------------------------------------------

    def _lock_and_advance(self) -> int:
        """
        Lock the active piece, clear lines, update score, then spawn next.

        Returns cleared lines.
        """
        self.phase = Phase.LOCKING
        self.lock()
        self.active = None
        self.emit(RenderEventKind.LOCK)

        cleared = resolve_lines(self.board)
        if cleared > 0:
            self.session.score += score_for_clears(cleared, self.score_cfg)
            self.emit(RenderEventKind.CLEAR)

        self.spawn_next()
        return cleared

    def emit(self, kind: RenderEventKind) -> Snapshot:
        snap = self.snapshot()
        if self._render_hooks:
            event = RenderEvent(kind=kind, snapshot=snap)
            for hook in list(self._render_hooks):
                hook(event)
        return snap

    def snapshot(self) -> Snapshot:
        """
        Public, stable snapshot accessor (read-only copy of board + session).
        """
        s = self.session
        return Snapshot(
            board=self.board.rows(),
            active=self.active,
            score=int(s.score),
            lives=int(s.lives),
            timer=int(s.timer),
            paused=bool(s.paused),
            phase=self.phase,
        )
