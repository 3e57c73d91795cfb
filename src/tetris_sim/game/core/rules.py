# src/tetris_sim/game/core/rules.py
from __future__ import annotations

from dataclasses import dataclass

from tetris_sim.game.core.board import Board
from tetris_sim.game.core.constants import POINTS_PER_LINE


@dataclass(frozen=True)
class ScoreConfig:
    points_per_line: int = POINTS_PER_LINE


def score_for_clears(cleared: int, cfg: ScoreConfig) -> int:
    # Linear: no multi-line bonus.
    if cleared <= 0:
        return 0
    return int(cleared) * int(cfg.points_per_line)


def resolve_lines(board: Board) -> int:
    """
    Clear every full row, scanning bottom to top in a single pass.

    After clearing row r the rows above shift down, so row r is checked again
    before moving up. Returns the number of rows cleared.
    """
    cleared = 0
    row = board.h - 1
    while row >= 0:
        if board.is_row_full(row):
            board.clear_row(row)
            cleared += 1
        else:
            row -= 1
    return cleared
