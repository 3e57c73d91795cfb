# src/tetris_sim/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

from tetris_sim.game.config import PlayConfig


def to_plain_dict(cfg: Any) -> dict[str, Any]:
    if isinstance(cfg, BaseModel):
        return cfg.model_dump(mode="json")
    if isinstance(cfg, DictConfig):
        data = OmegaConf.to_container(cfg, resolve=True)
        if not isinstance(data, dict):
            raise TypeError("config must resolve to a mapping")
        return data
    raise TypeError(f"unsupported config type: {type(cfg).__name__}")


def load_yaml(path: Path) -> dict[str, Any]:
    cfg_path = Path(path)
    cfg = OmegaConf.load(cfg_path)
    data = OmegaConf.to_container(cfg, resolve=True)
    if not isinstance(data, dict):
        raise TypeError(f"config({path}) must be a mapping")
    return data


def merge_overrides(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """
    Deep-merge overrides into base; None values in overrides are skipped.
    """
    clean = _drop_none(dict(overrides))
    merged = OmegaConf.merge(OmegaConf.create(dict(base)), OmegaConf.create(clean))
    data = OmegaConf.to_container(merged, resolve=True)
    if not isinstance(data, dict):
        raise TypeError("merged config must be a mapping")
    return data


def _drop_none(d: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in d.items():
        if v is None:
            continue
        out[k] = _drop_none(v) if isinstance(v, dict) else v
    return out


def load_play_config(path: Optional[Path] = None, *, overrides: Optional[Mapping[str, Any]] = None) -> PlayConfig:
    data: dict[str, Any] = load_yaml(path) if path is not None else {}
    if overrides:
        data = merge_overrides(data, overrides)
    return PlayConfig.model_validate(data)


__all__ = [
    "to_plain_dict",
    "load_yaml",
    "merge_overrides",
    "load_play_config",
]
