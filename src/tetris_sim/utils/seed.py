# src/tetris_sim/utils/seed.py
"""
Per-session seeding.

A configured base seed is never fed to the game directly. Each session (the
first one and every restart after it) gets its own 32-bit seed derived from
(base_seed, session_idx), so a seeded run replays identically across restarts
while consecutive sessions still deal different pieces.
"""
from __future__ import annotations

from typing import Optional

import numpy as np

_MASK64 = 0xFFFFFFFFFFFFFFFF


def splitmix64(x: int) -> int:
    """
    One SplitMix64 mixing step over an unsigned 64-bit value.
    """
    z = (int(x) + 0x9E3779B97F4A7C15) & _MASK64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK64
    return int(z ^ (z >> 31))


def seed32_from(*, base_seed: int, stream_id: int) -> int:
    """
    Mix base_seed and stream_id into a non-negative 31-bit seed.
    """
    return int(splitmix64((int(base_seed) << 32) ^ int(stream_id)) & 0x7FFFFFFF)


def session_rng(*, base_seed: Optional[int], session_idx: int) -> np.random.Generator:
    # No base seed: fresh OS entropy every session.
    if base_seed is None:
        return np.random.default_rng()
    return np.random.default_rng(seed32_from(base_seed=int(base_seed), stream_id=int(session_idx)))


__all__ = ["splitmix64", "seed32_from", "session_rng"]
