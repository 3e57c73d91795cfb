# src/tetris_sim/utils/logging.py
from __future__ import annotations

import logging

from rich.logging import RichHandler

PLAIN_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"


def _make_handler(*, use_rich: bool) -> logging.Handler:
    if not use_rich:
        plain = logging.StreamHandler()
        plain.setFormatter(logging.Formatter(PLAIN_FORMAT))
        return plain
    handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def setup_logger(*, name: str, use_rich: bool = True, level: str = "info") -> logging.Logger:
    """
    Configure one named logger for a CLI entry point.

    Safe to call repeatedly: existing handlers are replaced, not stacked.
    Child loggers (e.g. "<name>.loop") inherit the handler through propagation.
    """
    logger = logging.getLogger(str(name))
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    logger.addHandler(_make_handler(use_rich=bool(use_rich)))
    return logger


__all__ = ["PLAIN_FORMAT", "setup_logger"]
