# src/tetris_sim/game/rendering/pygame/grid.py
from __future__ import annotations

from dataclasses import dataclass

import pygame

from tetris_sim.game.core.types import Snapshot
from tetris_sim.game.rendering.pygame.palette import Palette
from tetris_sim.game.rendering.pygame.surf import SurfaceCache
from tetris_sim.game.rendering.pygame.window import Layout


@dataclass(frozen=True)
class GridStyle:
    frame_width: int = 2
    line_width: int = 1
    gap: int = 1  # px between neighbouring blocks


STYLE = GridStyle()


def draw_grid(
        *,
        screen: pygame.Surface,
        snapshot: Snapshot,
        layout: Layout,
        show_grid_lines: bool,
        palette: Palette,
        cache: SurfaceCache,
) -> None:
    """
    Paint every cell of snapshot.frame() (locked cells plus the falling piece), then the frame.
    """
    board = layout.board_rect
    cell = layout.cell
    size = max(1, cell - 2 * STYLE.gap)

    for r, row in enumerate(snapshot.frame()):
        y = board.top + r * cell
        for c, name in enumerate(row):
            x = board.left + c * cell
            block = cache.block(size=size, color=palette.color_for(name), bevelled=name is not None)
            screen.blit(block, (x + STYLE.gap, y + STYLE.gap))

    if show_grid_lines:
        for c in range(1, snapshot.width):
            x = board.left + c * cell
            pygame.draw.line(screen, palette.grid, (x, board.top), (x, board.bottom - 1), STYLE.line_width)
        for r in range(1, snapshot.height):
            y = board.top + r * cell
            pygame.draw.line(screen, palette.grid, (board.left, y), (board.right - 1, y), STYLE.line_width)

    pygame.draw.rect(screen, palette.border, layout.frame_rect, width=STYLE.frame_width)
