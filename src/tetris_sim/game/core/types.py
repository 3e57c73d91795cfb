# src/tetris_sim/game/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterator, Optional, Tuple

import numpy as np

CellRows = Tuple[Tuple[Optional[str], ...], ...]


class Command(Enum):
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    SOFT_DROP = auto()
    ROTATE = auto()
    HARD_DROP = auto()
    TOGGLE_PAUSE = auto()


class Phase(Enum):
    SPAWNING = auto()
    FALLING = auto()
    LOCKING = auto()
    GAME_OVER = auto()


class RenderEventKind(Enum):
    SPAWN = auto()
    MOVE = auto()
    ROTATE = auto()
    LOCK = auto()
    CLEAR = auto()
    RESET = auto()
    TICK = auto()
    PAUSE = auto()
    GAME_OVER = auto()


@dataclass(frozen=True, eq=False)
class ActivePiece:
    """
    The falling piece: a private copy of a template shape plus its origin.

    (row, col) is the board coordinate of the shape matrix's top-left corner.
    """

    kind: str
    shape: np.ndarray  # (H,W) bool, read-only
    color: str
    row: int
    col: int

    def cells(self) -> Iterator[Tuple[int, int]]:
        ys, xs = np.nonzero(self.shape)
        for yy, xx in zip(ys.tolist(), xs.tolist()):
            yield self.row + int(yy), self.col + int(xx)

    def moved(self, *, d_row: int, d_col: int) -> "ActivePiece":
        return ActivePiece(kind=self.kind, shape=self.shape, color=self.color, row=self.row + d_row, col=self.col + d_col)

    def with_shape(self, shape: np.ndarray) -> "ActivePiece":
        return ActivePiece(kind=self.kind, shape=shape, color=self.color, row=self.row, col=self.col)


@dataclass
class SessionState:
    score: int = 0
    lives: int = 0
    timer: int = 0
    paused: bool = False


@dataclass(frozen=True)
class Snapshot:
    """
    Render-facing, read-only view of the engine.

    Contracts:
      - board holds LOCKED cells only (no active overlay), row 0 at the top.
      - active is None between lock and the next spawn.
      - frame() overlays the active piece for renderers that want a single grid.
    """

    board: CellRows
    active: Optional[ActivePiece]
    score: int
    lives: int
    timer: int
    paused: bool
    phase: Phase

    @property
    def height(self) -> int:
        return len(self.board)

    @property
    def width(self) -> int:
        return len(self.board[0]) if self.board else 0

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def frame(self) -> CellRows:
        rows = [list(r) for r in self.board]
        if self.active is not None:
            for r, c in self.active.cells():
                if 0 <= r < self.height and 0 <= c < self.width:
                    rows[r][c] = self.active.color
        return tuple(tuple(r) for r in rows)


@dataclass(frozen=True)
class RenderEvent:
    kind: RenderEventKind
    snapshot: Snapshot


RenderHook = Callable[[RenderEvent], None]
GameOverListener = Callable[[Snapshot], None]


__all__ = [
    "ActivePiece",
    "CellRows",
    "Command",
    "GameOverListener",
    "Phase",
    "RenderEvent",
    "RenderEventKind",
    "RenderHook",
    "SessionState",
    "Snapshot",
]
