# src/tetris_sim/game/core/board.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from tetris_sim.game.core.constants import EMPTY_CELL
from tetris_sim.game.core.types import CellRows


@dataclass
class Board:
    """
    Fixed-size occupancy grid, row 0 at the top.

    grid stores color ids: 0 = empty, i >= 1 = colors[i - 1].
    The color table grows on demand as new colors are committed.
    """

    h: int
    w: int
    grid: np.ndarray  # (h, w) uint8
    colors: List[str] = field(default_factory=list)

    @classmethod
    def empty(cls, *, h: int, w: int) -> "Board":
        if int(h) <= 0 or int(w) <= 0:
            raise ValueError(f"board dimensions must be positive, got h={h} w={w}")
        return cls(h=int(h), w=int(w), grid=np.zeros((int(h), int(w)), dtype=np.uint8))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[str]]]) -> "Board":
        """
        Build a board from rows of color-or-None (fixtures, tests).
        """
        if not rows or not rows[0]:
            raise ValueError("rows must be a non-empty 2D sequence")
        h, w = len(rows), len(rows[0])
        board = cls.empty(h=h, w=w)
        cells = []
        for r, row in enumerate(rows):
            if len(row) != w:
                raise ValueError(f"rows must have equal width, got {w} and {len(row)}")
            for c, color in enumerate(row):
                if color is not None:
                    cells.append((r, c, str(color)))
        board.commit(cells)
        return board

    # ---- queries -------------------------------------------------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.h and 0 <= col < self.w

    def is_occupied(self, row: int, col: int) -> bool:
        # Above the visible area is open space; sides and floor are walls.
        if col < 0 or col >= self.w or row >= self.h:
            return True
        if row < 0:
            return False
        return bool(self.grid[row, col] != EMPTY_CELL)

    def cell(self, row: int, col: int) -> Optional[str]:
        if not self.in_bounds(row, col):
            raise IndexError(f"cell out of range: ({row}, {col}) for board {self.h}x{self.w}")
        cid = int(self.grid[row, col])
        if cid == EMPTY_CELL:
            return None
        return self.colors[cid - 1]

    def is_row_full(self, row: int) -> bool:
        r = int(row)
        if not 0 <= r < self.h:
            raise IndexError(f"row out of range: {r}")
        return bool(np.all(self.grid[r] != EMPTY_CELL))

    def is_empty(self) -> bool:
        return not bool(np.any(self.grid != EMPTY_CELL))

    def rows(self) -> CellRows:
        table = [None, *self.colors]
        return tuple(tuple(table[int(v)] for v in row) for row in self.grid)

    # ---- mutations -----------------------------------------------------------------

    def _color_id(self, color: str) -> int:
        try:
            return self.colors.index(color) + 1
        except ValueError:
            if len(self.colors) >= int(np.iinfo(np.uint8).max):
                raise ValueError(f"too many distinct colors on board (max {np.iinfo(np.uint8).max})") from None
            self.colors.append(color)
            return len(self.colors)

    def commit(self, cells: Iterable[Tuple[int, int, str]]) -> None:
        for row, col, color in cells:
            if not self.in_bounds(row, col):
                raise IndexError(f"commit out of range: ({row}, {col}) for board {self.h}x{self.w}")
            self.grid[row, col] = self._color_id(str(color))

    def clear_row(self, row: int) -> None:
        r = int(row)
        if not 0 <= r < self.h:
            raise IndexError(f"row out of range: {r}")
        # Drop the row, then push an empty one on top: everything above shifts down.
        kept = np.delete(self.grid, r, axis=0)
        self.grid = np.vstack([np.zeros((1, self.w), dtype=np.uint8), kept])

    def reset(self) -> None:
        self.grid = np.zeros((self.h, self.w), dtype=np.uint8)
        self.colors = []
