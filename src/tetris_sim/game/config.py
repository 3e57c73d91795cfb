# src/tetris_sim/game/config.py
from __future__ import annotations

from typing import Literal, Optional

import yaml
from pydantic import Field, field_validator, model_validator

from tetris_sim.config.base import ConfigBase, as_int, as_log_level
from tetris_sim.game.core.constants import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    INITIAL_LIVES,
    POINTS_PER_LINE,
    TICK_MS,
)
from tetris_sim.game.core.game import check_spawn_fits, default_spawn_col
from tetris_sim.game.core.pieceset import PieceCatalog

PieceRuleName = Literal["uniform", "bag7"]


class GameConfig(ConfigBase):
    """
    Engine-facing config.

    seed=None draws fresh entropy per session; an int makes every session
    (including restarts) reproducible.
    """

    seed: Optional[int] = Field(default=None, ge=0)
    piece_rule: PieceRuleName = "uniform"
    pieces: str = "classic7"

    height: int = Field(default=BOARD_HEIGHT, ge=1)
    width: int = Field(default=BOARD_WIDTH, ge=1)
    spawn_col: Optional[int] = Field(default=None, ge=0)

    tick_ms: int = Field(default=TICK_MS, ge=1)
    initial_lives: int = Field(default=INITIAL_LIVES, ge=0)
    points_per_line: int = Field(default=POINTS_PER_LINE, ge=0)

    @field_validator("seed", mode="before")
    @classmethod
    def _seed_int(cls, v: object) -> Optional[int]:
        if v is None:
            return None
        return as_int(v, where="game.seed")

    @field_validator("piece_rule", mode="before")
    @classmethod
    def _piece_rule_lower(cls, v: object) -> str:
        return str(v).strip().lower()

    @model_validator(mode="after")
    def _pieces_fit_board(self) -> "GameConfig":
        if self.spawn_col is not None and self.spawn_col >= self.width:
            raise ValueError(f"game.spawn_col must be < width ({self.width}), got {self.spawn_col}")
        try:
            catalog = PieceCatalog.named(self.pieces)
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"game.pieces: cannot load {self.pieces!r}: {e}") from e
        spawn_col = self.spawn_col if self.spawn_col is not None else default_spawn_col(self.width)
        check_spawn_fits(catalog, height=self.height, width=self.width, spawn_col=spawn_col)
        return self


class UiConfig(ConfigBase):
    cell: int = Field(default=30, ge=4)
    fps: int = Field(default=60, ge=1)
    show_grid: bool = False
    key_repeat_delay_ms: int = Field(default=0, ge=0)
    key_repeat_interval_ms: int = Field(default=0, ge=0)


class PlayConfig(ConfigBase):
    log_level: str = "info"
    use_rich: bool = True
    game: GameConfig = GameConfig()
    ui: UiConfig = UiConfig()

    @field_validator("log_level", mode="before")
    @classmethod
    def _log_level(cls, v: object) -> str:
        return as_log_level(v)


__all__ = ["GameConfig", "UiConfig", "PlayConfig", "PieceRuleName"]
