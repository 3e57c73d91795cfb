# src/tetris_sim/cli/simulate.py
from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from tetris_sim.config.io import load_play_config
from tetris_sim.game.core.loop import GameLoop
from tetris_sim.game.core.scheduler import ManualScheduler
from tetris_sim.game.core.types import Command, RenderEvent, RenderEventKind, Snapshot
from tetris_sim.game.factory import make_loop
from tetris_sim.utils.logging import setup_logger
from tetris_sim.utils.paths import resolve_config_path

# Pause is left out: a random agent toggling it would just stall the run.
_AGENT_COMMANDS = (
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.SOFT_DROP,
    Command.ROTATE,
    Command.HARD_DROP,
)


@dataclass
class SimStats:
    ticks: int = 0
    commands: int = 0
    locks: int = 0
    clears: int = 0
    games_over: int = 0
    best_score: int = 0


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Headless tetris-sim run driven by random commands.")
    ap.add_argument("--config", type=str, default=None)
    ap.add_argument("--seed", type=int, default=0, help="seeds both the game and the random agent")
    ap.add_argument("--ticks", type=int, default=10_000)
    ap.add_argument("--commands-per-tick", type=int, default=3)
    ap.add_argument("--log-every", type=int, default=2_000, help="progress log interval in ticks (0 disables)")
    ap.add_argument("--log-level", type=str, default="info")
    ap.add_argument("--no-rich", action="store_true")
    return ap.parse_args(argv)


def run_simulation(
        *,
        loop: GameLoop,
        scheduler: ManualScheduler,
        agent_rng: np.random.Generator,
        ticks: int,
        commands_per_tick: int,
        stats: SimStats,
        on_progress=None,
        log_every: int = 0,
) -> SimStats:
    loop.start()
    for t in range(int(ticks)):
        for _ in range(int(commands_per_tick)):
            cmd = _AGENT_COMMANDS[int(agent_rng.integers(0, len(_AGENT_COMMANDS)))]
            loop.dispatch(cmd)
            stats.commands += 1
        scheduler.advance(loop.tick_ms)
        stats.ticks += 1
        if on_progress is not None and log_every > 0 and (t + 1) % log_every == 0:
            on_progress(stats)
    loop.stop()
    return stats


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    path = resolve_config_path(args.config) if args.config else None
    cfg = load_play_config(path, overrides={"game": {"seed": int(args.seed)}})
    logger = setup_logger(name="tetris_sim.simulate", use_rich=not args.no_rich, level=str(args.log_level))

    stats = SimStats()

    def on_render(event: RenderEvent) -> None:
        if event.kind is RenderEventKind.LOCK:
            stats.locks += 1
        elif event.kind is RenderEventKind.CLEAR:
            stats.clears += 1

    def on_game_over(snap: Snapshot) -> None:
        stats.games_over += 1
        stats.best_score = max(stats.best_score, int(snap.score))
        logger.debug("[simulate] game over score=%d timer=%d", snap.score, snap.timer)

    def on_progress(s: SimStats) -> None:
        logger.info("[simulate] ticks=%d locks=%d clears=%d games_over=%d", s.ticks, s.locks, s.clears, s.games_over)

    scheduler = ManualScheduler()
    loop = make_loop(cfg.game, scheduler=scheduler, render_hook=on_render, on_game_over=on_game_over, logger=logger)
    logger.info("[simulate] seed=%d ticks=%d commands_per_tick=%d", args.seed, args.ticks, args.commands_per_tick)

    t0 = time.perf_counter()
    run_simulation(
        loop=loop,
        scheduler=scheduler,
        agent_rng=np.random.default_rng(int(args.seed)),
        ticks=int(args.ticks),
        commands_per_tick=int(args.commands_per_tick),
        stats=stats,
        on_progress=on_progress,
        log_every=int(args.log_every),
    )
    dt = max(1e-9, time.perf_counter() - t0)

    stats.best_score = max(stats.best_score, loop.game.score)
    logger.info(
        "[simulate] done ticks=%d commands=%d locks=%d clears=%d games_over=%d best_score=%d (%.0f ticks/s)",
        stats.ticks,
        stats.commands,
        stats.locks,
        stats.clears,
        stats.games_over,
        stats.best_score,
        stats.ticks / dt,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
