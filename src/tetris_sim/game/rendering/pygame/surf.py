# src/tetris_sim/game/rendering/pygame/surf.py
from __future__ import annotations

from typing import Dict, Tuple

import pygame

Color = Tuple[int, int, int]


def _shade(color: Color, factor: float) -> Color:
    r, g, b = color
    return (
        max(0, min(255, int(r * factor))),
        max(0, min(255, int(g * factor))),
        max(0, min(255, int(b * factor))),
    )


class SurfaceCache:
    """
    Block surfaces keyed by (size, color, bevel), built once and reused every frame.

    Bevelled blocks get a lighter top/left and darker bottom/right edge; empty
    cells are drawn flat.
    """

    def __init__(self, *, bevel: int = 3) -> None:
        self.bevel = int(bevel)
        self._blocks: Dict[Tuple[int, Color, bool], pygame.Surface] = {}

    def block(self, *, size: int, color: Color, bevelled: bool = True) -> pygame.Surface:
        key = (int(size), color, bool(bevelled))
        surf = self._blocks.get(key)
        if surf is None:
            surf = self._build(size=int(size), color=color, bevelled=bool(bevelled))
            self._blocks[key] = surf
        return surf

    def _build(self, *, size: int, color: Color, bevelled: bool) -> pygame.Surface:
        surf = pygame.Surface((size, size), flags=pygame.SRCALPHA)
        surf.fill(color)
        b = min(self.bevel, size // 4)
        if not bevelled or b <= 0:
            return surf
        light = _shade(color, 1.35)
        dark = _shade(color, 0.6)
        pygame.draw.polygon(surf, light, [(0, 0), (size, 0), (size - b, b), (b, b), (b, size - b), (0, size)])
        pygame.draw.polygon(surf, dark, [(size, size), (0, size), (b, size - b), (size - b, size - b), (size - b, b), (size, 0)])
        return surf


def blit_text(
        *,
        screen: pygame.Surface,
        font: pygame.font.Font,
        text: str,
        pos: Tuple[int, int],
        color: Color,
) -> pygame.Rect:
    img = font.render(text, True, color)
    return screen.blit(img, pos)


def blit_text_centered(
        *,
        screen: pygame.Surface,
        font: pygame.font.Font,
        text: str,
        center: Tuple[int, int],
        color: Color,
) -> pygame.Rect:
    img = font.render(text, True, color)
    return screen.blit(img, img.get_rect(center=center))
