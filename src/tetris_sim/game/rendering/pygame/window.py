# src/tetris_sim/game/rendering/pygame/window.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pygame

SIDEBAR_W = 220
OUTER_PAD = 24
BOARD_MARGIN = 6


@dataclass(frozen=True)
class WindowSpec:
    width: int
    height: int
    title: str = "tetris-sim"


@dataclass(frozen=True)
class Layout:
    """
    Window geometry in pixels for one board size.

    origin is the top-left corner of board cell (0, 0); the framed board and
    the sidebar sit side by side with OUTER_PAD around them.
    """

    board_h: int
    board_w: int
    cell: int
    sidebar_w: int
    window: WindowSpec
    margin: int = BOARD_MARGIN

    @property
    def origin(self) -> Tuple[int, int]:
        return OUTER_PAD, OUTER_PAD

    @property
    def board_rect(self) -> pygame.Rect:
        ox, oy = self.origin
        return pygame.Rect(ox, oy, self.board_w * self.cell, self.board_h * self.cell)

    @property
    def frame_rect(self) -> pygame.Rect:
        return self.board_rect.inflate(2 * self.margin, 2 * self.margin)

    @property
    def sidebar_x(self) -> int:
        return self.board_rect.right + OUTER_PAD

    @property
    def sidebar_y(self) -> int:
        return self.frame_rect.top

    @property
    def sidebar_h(self) -> int:
        return self.frame_rect.height

    @property
    def window_w(self) -> int:
        return self.window.width

    @property
    def window_h(self) -> int:
        return self.window.height


def compute_layout(
        *,
        board_h: int,
        board_w: int,
        cell: int,
        sidebar_w: int = SIDEBAR_W,
        title: str = "tetris-sim",
) -> Layout:
    bh, bw, c = int(board_h), int(board_w), int(cell)
    width = OUTER_PAD + bw * c + OUTER_PAD + int(sidebar_w) + OUTER_PAD // 2
    height = OUTER_PAD + bh * c + OUTER_PAD
    return Layout(
        board_h=bh,
        board_w=bw,
        cell=c,
        sidebar_w=int(sidebar_w),
        window=WindowSpec(width=width, height=height, title=str(title)),
    )


def create_window(spec: WindowSpec) -> pygame.Surface:
    pygame.display.set_caption(spec.title)
    return pygame.display.set_mode((int(spec.width), int(spec.height)))
