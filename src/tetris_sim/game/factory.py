# src/tetris_sim/game/factory.py
from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from tetris_sim.game.config import GameConfig
from tetris_sim.game.core.game import TetrisGame
from tetris_sim.game.core.loop import GameLoop
from tetris_sim.game.core.piece_rules import make_piece_rule
from tetris_sim.game.core.pieceset import PieceCatalog
from tetris_sim.game.core.rules import ScoreConfig
from tetris_sim.game.core.scheduler import Scheduler
from tetris_sim.game.core.types import GameOverListener, RenderHook
from tetris_sim.utils.seed import session_rng


def make_game(cfg: GameConfig, *, render_hook: Optional[RenderHook] = None) -> TetrisGame:
    catalog = PieceCatalog.named(cfg.pieces)
    return TetrisGame(
        height=int(cfg.height),
        width=int(cfg.width),
        catalog=catalog,
        piece_rule=make_piece_rule(cfg.piece_rule),
        score_cfg=ScoreConfig(points_per_line=int(cfg.points_per_line)),
        initial_lives=int(cfg.initial_lives),
        spawn_col=cfg.spawn_col,
        render_hook=render_hook,
    )


def make_loop(
        cfg: GameConfig,
        *,
        scheduler: Scheduler,
        render_hook: Optional[RenderHook] = None,
        on_game_over: Optional[GameOverListener] = None,
        logger: Optional[logging.Logger] = None,
) -> GameLoop:
    game = make_game(cfg, render_hook=render_hook)
    return GameLoop(
        game=game,
        scheduler=scheduler,
        tick_ms=int(cfg.tick_ms),
        on_game_over=on_game_over,
        rng_factory=partial(_session_rng, cfg.seed),
        logger=logger,
    )


def _session_rng(base_seed: Optional[int], session_idx: int):
    return session_rng(base_seed=base_seed, session_idx=session_idx)


__all__ = ["make_game", "make_loop"]
