# src/tetris_sim/game/core/__init__.py
from __future__ import annotations

from tetris_sim.game.core.board import Board
from tetris_sim.game.core.game import TetrisGame
from tetris_sim.game.core.loop import GameLoop, normalize_command
from tetris_sim.game.core.piece_rules import BagPieceRule, PieceRule, UniformPieceRule, make_piece_rule
from tetris_sim.game.core.pieceset import PieceCatalog, PieceTemplate
from tetris_sim.game.core.rotation import collides, rotate_cw, try_rotate
from tetris_sim.game.core.rules import ScoreConfig, resolve_lines, score_for_clears
from tetris_sim.game.core.scheduler import CancelToken, ManualScheduler, PollingScheduler, Scheduler
from tetris_sim.game.core.types import (
    ActivePiece,
    Command,
    GameOverListener,
    Phase,
    RenderEvent,
    RenderEventKind,
    RenderHook,
    SessionState,
    Snapshot,
)

__all__ = [
    "ActivePiece",
    "BagPieceRule",
    "Board",
    "CancelToken",
    "Command",
    "GameLoop",
    "GameOverListener",
    "ManualScheduler",
    "Phase",
    "PieceCatalog",
    "PieceRule",
    "PieceTemplate",
    "PollingScheduler",
    "RenderEvent",
    "RenderEventKind",
    "RenderHook",
    "Scheduler",
    "ScoreConfig",
    "SessionState",
    "Snapshot",
    "TetrisGame",
    "UniformPieceRule",
    "collides",
    "make_piece_rule",
    "normalize_command",
    "resolve_lines",
    "rotate_cw",
    "score_for_clears",
    "try_rotate",
]
