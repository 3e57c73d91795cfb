# src/tetris_sim/game/rendering/pygame/palette.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import pygame

Color = Tuple[int, int, int]


def _default_piece_colors() -> Dict[str, Color]:
    return {
        "cyan": (0, 240, 240),
        "yellow": (240, 240, 0),
        "purple": (160, 0, 240),
        "red": (240, 0, 0),
        "green": (0, 240, 0),
        "blue": (0, 0, 240),
        "orange": (240, 160, 0),
    }


@dataclass(frozen=True)
class Palette:
    """
    Central UI palette for pygame rendering.

    Board cells carry color names (from the piece asset); piece_colors maps the
    known ones, anything else goes through pygame's named-color table.
    """

    bg: Color = (18, 18, 22)

    panel_bg: Color = (26, 26, 32)
    border: Color = (70, 70, 85)

    text: Color = (235, 235, 245)
    muted: Color = (170, 170, 190)
    accent: Color = (0, 255, 128)

    empty: Color = (68, 68, 68)  # '#444'
    grid: Color = (45, 45, 58)
    warn: Color = (240, 90, 90)

    fallback_piece: Color = (180, 180, 180)

    overlay_rgba: Tuple[int, int, int, int] = (0, 0, 0, 160)

    piece_colors: Dict[str, Color] = field(default_factory=_default_piece_colors)

    def color_for(self, name: Optional[str]) -> Color:
        if name is None:
            return self.empty
        key = str(name).strip().lower()
        c = self.piece_colors.get(key)
        if c is not None:
            return c
        try:
            pc = pygame.Color(key)
        except ValueError:
            return self.fallback_piece
        return int(pc.r), int(pc.g), int(pc.b)
