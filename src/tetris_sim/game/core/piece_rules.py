# src/tetris_sim/game/core/piece_rules.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Dict, Sequence

import numpy as np


class PieceRule(ABC):
    """
    Decides which kind spawns next.

    The game calls reset() on every session start (construction, set_rng(), reset())
    and next_piece() once per spawn. The generator is always handed in by the
    game; a rule never seeds its own.
    """

    name: str = "?"

    def __init__(self) -> None:
        self._rng: np.random.Generator | None = None
        self._kinds: tuple[str, ...] = ()

    def reset(self, *, rng: np.random.Generator, kinds: Sequence[str]) -> None:
        kinds_t = tuple(str(k) for k in kinds)
        if not kinds_t:
            raise ValueError(f"{type(self).__name__} requires non-empty kinds")
        self._rng = rng
        self._kinds = kinds_t
        self._on_reset()

    def _on_reset(self) -> None:
        pass

    def _require_rng(self) -> np.random.Generator:
        if self._rng is None:
            raise RuntimeError(f"{type(self).__name__}.reset() must be called before next_piece()")
        return self._rng

    @abstractmethod
    def next_piece(self) -> str:
        raise NotImplementedError


class UniformPieceRule(PieceRule):
    """
    Every kind equally likely on every spawn (the classic behaviour).
    """

    name = "uniform"

    def next_piece(self) -> str:
        rng = self._require_rng()
        return self._kinds[int(rng.integers(0, len(self._kinds)))]


class BagPieceRule(PieceRule):
    """
    Shuffled bag: each kind appears bag_copies times per bag, then the bag refills.
    """

    name = "bag7"

    def __init__(self, *, bag_copies: int = 1) -> None:
        super().__init__()
        self.bag_copies = int(bag_copies)
        if self.bag_copies <= 0:
            raise ValueError(f"bag_copies must be >= 1, got {self.bag_copies}")
        self._bag: list[str] = []

    def _on_reset(self) -> None:
        self._bag = []

    def next_piece(self) -> str:
        rng = self._require_rng()
        if not self._bag:
            self._bag = [k for k in self._kinds for _ in range(self.bag_copies)]
            rng.shuffle(self._bag)
        return self._bag.pop()


PIECE_RULES: Dict[str, Callable[[], PieceRule]] = {
    UniformPieceRule.name: UniformPieceRule,
    BagPieceRule.name: BagPieceRule,
}


def make_piece_rule(name: str) -> PieceRule:
    key = str(name).strip().lower()
    factory = PIECE_RULES.get(key)
    if factory is None:
        raise ValueError(f"unknown piece_rule {name!r} (known: {', '.join(PIECE_RULES)})")
    return factory()


__all__ = ["PieceRule", "UniformPieceRule", "BagPieceRule", "PIECE_RULES", "make_piece_rule"]
