# src/tetris_sim/config/base.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class ConfigBase(BaseModel):
    """
    Shared base for every config section: unknown keys are errors and loaded
    configs are immutable.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )


def as_int(value: object, *, where: str) -> int:
    """
    Strict int coercion for before-validators: rejects bools, accepts int-like strings.
    """
    if isinstance(value, bool):
        raise ValueError(f"{where} must be an int, got bool")
    if not isinstance(value, (int, float, str)):
        raise ValueError(f"{where} must be an int-like value, got {type(value).__name__}")
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{where} must be an int-like value, got {value!r}") from e


def as_log_level(value: object) -> str:
    s = str(value).strip().lower()
    if s not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {'|'.join(LOG_LEVELS)}, got {value!r}")
    return s


__all__ = ["ConfigBase", "LOG_LEVELS", "as_int", "as_log_level"]
