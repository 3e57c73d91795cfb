# src/tetris_sim/cli/play.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Optional

from tetris_sim.config.io import load_play_config
from tetris_sim.game.config import PlayConfig
from tetris_sim.utils.logging import setup_logger
from tetris_sim.utils.paths import resolve_config_path


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play tetris-sim with the keyboard (pygame).")
    ap.add_argument("--config", type=str, default=None, help="YAML config (see configs/play.yaml)")

    # --- game ---
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--tick-ms", type=int, default=None, help="gravity interval in ms")
    ap.add_argument("--piece-rule", type=str, default=None, choices=["uniform", "bag7"])

    # --- ui ---
    ap.add_argument("--cell", type=int, default=None)
    ap.add_argument("--fps", type=int, default=None, help="render FPS cap (UI loop)")
    ap.add_argument("--show-grid", action="store_true", default=None)

    ap.add_argument("--log-level", type=str, default=None)
    ap.add_argument("--no-rich", action="store_true")
    return ap.parse_args(argv)


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "log_level": args.log_level,
        "use_rich": False if args.no_rich else None,
        "game": {
            "seed": args.seed,
            "tick_ms": args.tick_ms,
            "piece_rule": args.piece_rule,
        },
        "ui": {
            "cell": args.cell,
            "fps": args.fps,
            "show_grid": args.show_grid,
        },
    }


def build_config(args: argparse.Namespace) -> PlayConfig:
    path: Optional[Path] = resolve_config_path(args.config) if args.config else None
    return load_play_config(path, overrides=overrides_from_args(args))


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    cfg = build_config(args)
    logger = setup_logger(name="tetris_sim.play", use_rich=cfg.use_rich, level=cfg.log_level)

    # pygame import is deferred so --help works without a display.
    from tetris_sim.game.rendering.pygame.app import run_manual_play

    return run_manual_play(cfg=cfg, logger=logger)


if __name__ == "__main__":
    raise SystemExit(main())
