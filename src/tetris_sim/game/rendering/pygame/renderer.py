# src/tetris_sim/game/rendering/pygame/renderer.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pygame

from tetris_sim.game.core.types import Snapshot
from tetris_sim.game.rendering.pygame.grid import draw_grid
from tetris_sim.game.rendering.pygame.palette import Color, Palette
from tetris_sim.game.rendering.pygame.sidebar import draw_sidebar
from tetris_sim.game.rendering.pygame.surf import SurfaceCache, blit_text_centered
from tetris_sim.game.rendering.pygame.window import Layout, compute_layout, create_window

__all__ = ["Color", "Palette", "TetrisRenderer"]


@dataclass(frozen=True)
class Fonts:
    big: pygame.font.Font
    small: pygame.font.Font
    tiny: pygame.font.Font


class TetrisRenderer:
    def __init__(
        self,
        *,
        cell: int,
        show_grid_lines: bool,
        palette: Optional[Palette] = None,
    ) -> None:
        self.cell = int(cell)
        self.show_grid_lines = bool(show_grid_lines)
        self.palette = palette or Palette()

        big = pygame.font.SysFont("consolas", 30, bold=True)
        small = pygame.font.SysFont("consolas", 16)
        tiny = pygame.font.SysFont("consolas", 14)
        self.fonts = Fonts(big=big, small=small, tiny=tiny)

        self.cache = SurfaceCache()

    def init_window(
        self,
        *,
        board_h: int,
        board_w: int,
        title: str = "tetris-sim | play",
    ) -> tuple[pygame.Surface, Layout]:
        layout = compute_layout(board_h=int(board_h), board_w=int(board_w), cell=int(self.cell), title=str(title))
        screen = create_window(layout.window)
        return screen, layout

    def render(
        self,
        *,
        screen: pygame.Surface,
        snapshot: Snapshot,
        layout: Layout,
        banner: Optional[str] = None,
    ) -> None:
        screen.fill(self.palette.bg)

        draw_grid(
            screen=screen,
            snapshot=snapshot,
            layout=layout,
            show_grid_lines=self.show_grid_lines,
            palette=self.palette,
            cache=self.cache,
        )

        draw_sidebar(
            screen=screen,
            snapshot=snapshot,
            x=layout.sidebar_x,
            y=layout.sidebar_y,
            w=layout.sidebar_w,
            h=layout.sidebar_h,
            palette=self.palette,
            font_small=self.fonts.small,
            font_tiny=self.fonts.tiny,
        )

        text = banner or ("PAUSED" if snapshot.paused else None)
        if text:
            self._draw_banner(screen=screen, layout=layout, text=text)

    def _draw_banner(self, *, screen: pygame.Surface, layout: Layout, text: str) -> None:
        board = layout.board_rect
        shade = pygame.Surface(board.size, flags=pygame.SRCALPHA)
        shade.fill(self.palette.overlay_rgba)
        screen.blit(shade, board.topleft)

        cx, cy = board.center
        lines = str(text).splitlines()
        step = self.fonts.big.get_linesize()
        y0 = cy - (step * (len(lines) - 1)) // 2
        for i, line in enumerate(lines):
            font = self.fonts.big if i == 0 else self.fonts.small
            blit_text_centered(screen=screen, font=font, text=line, center=(cx, y0 + i * step), color=self.palette.text)
