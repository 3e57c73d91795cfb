# src/tetris_sim/game/rendering/pygame/app.py
from __future__ import annotations

import logging
from typing import Optional

import pygame

from tetris_sim.game.config import PlayConfig
from tetris_sim.game.core.scheduler import PollingScheduler
from tetris_sim.game.core.types import Command, RenderEvent, Snapshot
from tetris_sim.game.factory import make_loop
from tetris_sim.game.rendering.pygame.renderer import TetrisRenderer

KEYMAP: dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_a: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_d: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_s: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_w: Command.ROTATE,
    pygame.K_RETURN: Command.HARD_DROP,
    pygame.K_KP_ENTER: Command.HARD_DROP,
    pygame.K_SPACE: Command.TOGGLE_PAUSE,
    pygame.K_p: Command.TOGGLE_PAUSE,
}


def run_manual_play(*, cfg: PlayConfig, logger: Optional[logging.Logger] = None) -> int:
    """
    Keyboard-driven pygame frontend around one GameLoop.

    The engine notifies through the render hook; this loop only redraws when a
    new snapshot arrived. Game over shows a blocking banner until a key is pressed.
    """
    log = logger or logging.getLogger("tetris_sim.play")

    pygame.init()
    ui = cfg.ui
    if ui.key_repeat_delay_ms > 0:
        pygame.key.set_repeat(int(ui.key_repeat_delay_ms), int(max(1, ui.key_repeat_interval_ms)))

    renderer = TetrisRenderer(cell=ui.cell, show_grid_lines=ui.show_grid)
    screen, layout = renderer.init_window(board_h=cfg.game.height, board_w=cfg.game.width)
    clock = pygame.time.Clock()

    latest: list[Snapshot] = []
    dirty = True
    quit_requested = False

    def on_render(event: RenderEvent) -> None:
        nonlocal dirty
        latest[:] = [event.snapshot]
        dirty = True

    def on_game_over(snap: Snapshot) -> None:
        nonlocal quit_requested
        renderer.render(
            screen=screen,
            snapshot=snap,
            layout=layout,
            banner=f"GAME OVER\nscore {snap.score}\npress any key",
        )
        pygame.display.flip()
        while True:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                quit_requested = True
                return
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    quit_requested = True
                return

    scheduler = PollingScheduler(clock_ms=pygame.time.get_ticks)
    loop = make_loop(
        cfg.game,
        scheduler=scheduler,
        render_hook=on_render,
        on_game_over=on_game_over,
        logger=log,
    )
    loop.start()
    latest[:] = [loop.game.snapshot()]
    log.info("[play] board=%dx%d tick_ms=%d seed=%s", cfg.game.height, cfg.game.width, cfg.game.tick_ms, cfg.game.seed)

    try:
        while not quit_requested:
            clock.tick(int(ui.fps))

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    quit_requested = True
                    break
                if event.type != pygame.KEYDOWN:
                    continue
                if event.key == pygame.K_ESCAPE:
                    quit_requested = True
                    break
                if event.key == pygame.K_r:
                    loop.restart()
                    continue
                cmd = KEYMAP.get(event.key)
                if cmd is not None:
                    loop.dispatch(cmd)
                if quit_requested:
                    break

            if quit_requested:
                break

            scheduler.poll()

            if dirty and latest:
                renderer.render(screen=screen, snapshot=latest[0], layout=layout)
                pygame.display.flip()
                dirty = False
    finally:
        loop.stop()
        log.info("[play] quit score=%d games_over=%d", loop.game.score, loop.games_over)
        pygame.quit()
    return 0
