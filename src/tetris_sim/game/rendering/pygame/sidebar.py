# src/tetris_sim/game/rendering/pygame/sidebar.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import pygame

from tetris_sim.game.core.types import Snapshot
from tetris_sim.game.rendering.pygame.palette import Palette
from tetris_sim.game.rendering.pygame.surf import blit_text

CONTROLS: Sequence[Tuple[str, str]] = (
    ("Left/Right", "move"),
    ("Up", "rotate"),
    ("Down", "soft drop"),
    ("Enter", "hard drop"),
    ("Space/P", "pause"),
    ("R", "restart"),
    ("Esc", "quit"),
)


@dataclass(frozen=True)
class SidebarLayout:
    """
    Pixel geometry for the sidebar panels.
    """

    panel_gap_y: int = 14
    stats_panel_h: int = 130

    pad_x: int = 10
    title_pad_y: int = 8
    rows_y_offset: int = 34
    row_h: int = 22
    value_dx: int = 80

    controls_row_h: int = 20
    controls_desc_dx: int = 100


_LAYOUT = SidebarLayout()


def draw_sidebar(
        *,
        screen: pygame.Surface,
        snapshot: Snapshot,
        x: int,
        y: int,
        w: int,
        h: int,
        palette: Palette,
        font_small: pygame.font.Font,
        font_tiny: pygame.font.Font,
) -> None:
    L = _LAYOUT

    # Stats panel
    stats = pygame.Rect(x, y, w, L.stats_panel_h)
    pygame.draw.rect(screen, palette.panel_bg, stats)
    pygame.draw.rect(screen, palette.border, stats, width=1)
    blit_text(screen=screen, font=font_small, text="SESSION", pos=(x + L.pad_x, y + L.title_pad_y), color=palette.accent)

    rows = (
        ("Score", str(snapshot.score)),
        ("Lives", str(snapshot.lives)),
        ("Time", str(snapshot.timer)),
    )
    ry = y + L.rows_y_offset
    for label, value in rows:
        blit_text(screen=screen, font=font_tiny, text=label, pos=(x + L.pad_x, ry), color=palette.muted)
        blit_text(screen=screen, font=font_tiny, text=value, pos=(x + L.pad_x + L.value_dx, ry), color=palette.text)
        ry += L.row_h

    if snapshot.paused:
        blit_text(screen=screen, font=font_small, text="PAUSED", pos=(x + L.pad_x, ry), color=palette.warn)

    # Controls panel
    cy = y + L.stats_panel_h + L.panel_gap_y
    ch = max(0, h - (cy - y))
    controls = pygame.Rect(x, cy, w, ch)
    pygame.draw.rect(screen, palette.panel_bg, controls)
    pygame.draw.rect(screen, palette.border, controls, width=1)
    blit_text(screen=screen, font=font_small, text="CONTROLS", pos=(x + L.pad_x, cy + L.title_pad_y), color=palette.accent)

    ky = cy + L.rows_y_offset
    for key, desc in CONTROLS:
        if ky + L.controls_row_h > cy + ch:
            break
        blit_text(screen=screen, font=font_tiny, text=key, pos=(x + L.pad_x, ky), color=palette.text)
        blit_text(screen=screen, font=font_tiny, text=desc, pos=(x + L.pad_x + L.controls_desc_dx, ky), color=palette.muted)
        ky += L.controls_row_h
