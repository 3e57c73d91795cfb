# tests/test_config.py
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from tetris_sim.config.io import load_play_config, merge_overrides, to_plain_dict
from tetris_sim.game.config import GameConfig, PlayConfig
from tetris_sim.game.core.piece_rules import BagPieceRule
from tetris_sim.game.core.scheduler import ManualScheduler
from tetris_sim.game.core.types import Command
from tetris_sim.game.factory import make_game, make_loop

REPO_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "play.yaml"


def test_defaults_match_classic_rules() -> None:
    cfg = PlayConfig()
    assert (cfg.game.height, cfg.game.width) == (20, 10)
    assert cfg.game.tick_ms == 1000
    assert cfg.game.initial_lives == 3
    assert cfg.game.points_per_line == 100
    assert cfg.game.seed is None
    assert cfg.game.piece_rule == "uniform"


def test_game_config_rejects_unknown_keys() -> None:
    with pytest.raises(ValidationError, match="level"):
        GameConfig.model_validate({"level": 3})


def test_game_config_rejects_spawn_col_outside_board() -> None:
    with pytest.raises(ValidationError, match="spawn_col"):
        GameConfig.model_validate({"width": 6, "spawn_col": 6})


@pytest.mark.parametrize(
    "overrides",
    [
        {"width": 4},
        {"width": 10, "spawn_col": 7},
        {"height": 1},
    ],
)
def test_game_config_rejects_boards_where_a_piece_cannot_spawn(overrides: dict) -> None:
    with pytest.raises(ValidationError, match="does not fit"):
        GameConfig.model_validate(overrides)


def test_narrow_board_is_accepted_when_spawn_col_leaves_room() -> None:
    cfg = GameConfig.model_validate({"width": 4, "spawn_col": 0, "seed": 3})
    loop = make_loop(cfg, scheduler=ManualScheduler())
    loop.start()
    for _ in range(200):
        loop.dispatch(Command.HARD_DROP)
    assert loop.running
    assert loop.games_over > 0


def test_game_config_rejects_missing_pieces_asset(tmp_path: Path) -> None:
    with pytest.raises(ValidationError, match="cannot load"):
        GameConfig.model_validate({"pieces": str(tmp_path / "missing.yaml")})


def test_piece_rule_is_case_insensitive_and_checked() -> None:
    assert GameConfig.model_validate({"piece_rule": "BAG7"}).piece_rule == "bag7"
    with pytest.raises(ValidationError):
        GameConfig.model_validate({"piece_rule": "random"})


def test_play_config_rejects_bad_log_level() -> None:
    with pytest.raises(ValidationError, match="log_level"):
        PlayConfig.model_validate({"log_level": "verbose"})


def test_configs_are_frozen() -> None:
    cfg = GameConfig()
    with pytest.raises(ValidationError):
        cfg.tick_ms = 5  # type: ignore[misc]


def test_load_play_config_merges_overrides(tmp_path: Path) -> None:
    p = tmp_path / "play.yaml"
    p.write_text("game:\n  tick_ms: 500\n  seed: 1\nui:\n  cell: 20\n", encoding="utf-8")

    cfg = load_play_config(p, overrides={"log_level": None, "game": {"seed": 3, "tick_ms": None}})

    assert cfg.game.tick_ms == 500
    assert cfg.game.seed == 3
    assert cfg.ui.cell == 20
    assert cfg.log_level == "info"


def test_merge_overrides_skips_none() -> None:
    out = merge_overrides({"a": 1, "b": {"c": 2}}, {"a": None, "b": {"c": 5, "d": None}})
    assert out == {"a": 1, "b": {"c": 5}}


def test_bundled_config_matches_defaults() -> None:
    cfg = load_play_config(REPO_CONFIG)
    assert to_plain_dict(cfg) == to_plain_dict(PlayConfig())


def test_make_game_applies_config() -> None:
    game = make_game(GameConfig(height=12, width=8, spawn_col=2, piece_rule="bag7", initial_lives=5))
    assert game.board.grid.shape == (12, 8)
    assert game.spawn_col == 2
    assert game.lives == 5
    assert isinstance(game._piece_rule, BagPieceRule)


def test_make_loop_with_seed_is_reproducible() -> None:
    def kinds(seed: int) -> list[str]:
        loop = make_loop(GameConfig(seed=seed), scheduler=ManualScheduler())
        loop.start()
        out = []
        for _ in range(5):
            assert loop.game.active is not None
            out.append(loop.game.active.kind)
            loop.dispatch(Command.HARD_DROP)
        return out

    assert kinds(9) == kinds(9)
