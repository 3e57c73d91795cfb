# src/tetris_sim/game/core/constants.py
from __future__ import annotations

# Board / cell encoding
EMPTY_CELL: int = 0
BOARD_HEIGHT: int = 20
BOARD_WIDTH: int = 10

# Session defaults
INITIAL_LIVES: int = 3
POINTS_PER_LINE: int = 100

# Gravity tick interval (one tick = one timer unit)
TICK_MS: int = 1000
