# src/tetris_sim/game/core/rotation.py
from __future__ import annotations

import numpy as np

from tetris_sim.game.core.board import Board
from tetris_sim.game.core.pieceset import freeze


def rotate_cw(shape: np.ndarray) -> np.ndarray:
    """
    90 degrees clockwise: transpose, then reverse each row.

    Returns a new read-only matrix; the input is never touched.
    """
    m = np.asarray(shape)
    return freeze(m.T[:, ::-1])


def collides(*, board: Board, shape: np.ndarray, row: int, col: int) -> bool:
    m = np.asarray(shape)

    h, w = m.shape
    for yy in range(h):
        for xx in range(w):
            if not m[yy, xx]:
                continue
            if board.is_occupied(row + yy, col + xx):
                return True
    return False


def try_rotate(*, board: Board, shape: np.ndarray, row: int, col: int) -> np.ndarray:
    """
    Minimal rotation rule: same origin, no wall kicks.

    Returns the rotated shape, or the original shape object if the rotation collides.
    """
    candidate = rotate_cw(shape)
    if collides(board=board, shape=candidate, row=row, col=col):
        return shape
    return candidate
