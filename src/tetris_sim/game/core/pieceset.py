# src/tetris_sim/game/core/pieceset.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import yaml

from tetris_sim.utils.paths import pieces_dir


def _parse_color(v: object, *, kind: str) -> str:
    if not isinstance(v, str) or not v.strip():
        raise ValueError(f"{kind!r}: color must be a non-empty string, got {v!r}")
    return v.strip().lower()


def _parse_shape(rows: Sequence[str], *, kind: str) -> np.ndarray:
    if not isinstance(rows, (list, tuple)) or len(rows) == 0:
        raise ValueError(f"{kind!r}: shape must be a non-empty list of strings")

    width = None
    out: List[List[bool]] = []
    for r in rows:
        if not isinstance(r, str) or len(r) == 0:
            raise ValueError(f"{kind!r}: shape rows must be non-empty strings, got {r!r}")
        if width is None:
            width = len(r)
        elif len(r) != width:
            raise ValueError(f"{kind!r}: shape rows must have equal width, got widths {width} and {len(r)}")

        out.append([ch == "#" for ch in r])

    arr = np.asarray(out, dtype=bool)
    if not bool(arr.any()):
        raise ValueError(f"{kind!r}: shape must have at least one filled cell ('#')")
    return freeze(arr)


def freeze(shape: np.ndarray) -> np.ndarray:
    """
    Return a read-only bool copy of a shape matrix.
    """
    arr = np.array(shape, dtype=bool, copy=True)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class PieceTemplate:
    kind: str
    shape: np.ndarray  # (H,W) bool, read-only
    color: str

    def cell_count(self) -> int:
        return int(self.shape.sum())


@dataclass(frozen=True)
class PieceCatalog:
    """
    Fixed set of piece templates, loaded from YAML.

    Provides:
      - stable ordering of kinds
      - get(kind) / shape(kind) / color_of(kind)
      - random_template(rng) (uniform)

    Asset contract:
      - one shape per kind (the spawn orientation); rotations are computed.
    """

    templates: Dict[str, PieceTemplate]
    kind_order: Tuple[str, ...]

    @staticmethod
    def default_classic7_path() -> Path:
        return pieces_dir() / "classic7.yaml"

    @classmethod
    def classic7(cls) -> "PieceCatalog":
        return cls.from_yaml(cls.default_classic7_path(), expected_cells=4)

    @classmethod
    def named(cls, name: str) -> "PieceCatalog":
        """
        Load a bundled asset by stem (e.g. "classic7") or a YAML path.
        """
        s = str(name).strip()
        p = Path(s)
        if p.suffix.lower() in {".yaml", ".yml"}:
            return cls.from_yaml(p)
        return cls.from_yaml(pieces_dir() / f"{s}.yaml")

    @classmethod
    def from_yaml(cls, path: Path, *, expected_cells: Optional[int] = None) -> "PieceCatalog":
        p = Path(path)
        data = yaml.safe_load(p.read_text(encoding="utf-8"))

        if not isinstance(data, dict):
            raise ValueError(f"piece YAML must be a mapping at top-level, got {type(data)!r}")

        if expected_cells is None:
            v = data.get("expected_cells", None)
            if isinstance(v, bool):
                raise TypeError("expected_cells must be int or str, got bool")
            if isinstance(v, int):
                expected_cells = v
            elif isinstance(v, str):
                expected_cells = int(v)
            elif v is not None:
                raise TypeError(f"expected_cells must be int or str, got {type(v)!r}")

        pieces_node = data.get("pieces")
        if not isinstance(pieces_node, dict) or not pieces_node:
            raise ValueError("piece YAML must contain non-empty mapping 'pieces:'")

        templates: Dict[str, PieceTemplate] = {}
        kind_order: List[str] = []

        for kind, spec in pieces_node.items():
            if not isinstance(kind, str) or not kind:
                raise ValueError(f"piece key must be a non-empty string, got {kind!r}")
            if not isinstance(spec, dict):
                raise ValueError(f"piece spec for {kind!r} must be a mapping, got {type(spec)!r}")

            shape = _parse_shape(spec.get("shape"), kind=kind)
            if expected_cells is not None and int(shape.sum()) != int(expected_cells):
                raise ValueError(f"{kind!r}: expected {expected_cells} filled cells, got {int(shape.sum())}")

            color = _parse_color(spec.get("color"), kind=kind)

            templates[kind] = PieceTemplate(kind=kind, shape=shape, color=color)
            kind_order.append(kind)

        return cls(templates=templates, kind_order=tuple(kind_order))

    def kinds(self) -> Tuple[str, ...]:
        return self.kind_order

    def __contains__(self, kind: str) -> bool:
        return kind in self.templates

    def __len__(self) -> int:
        return len(self.kind_order)

    def get(self, kind: str) -> PieceTemplate:
        try:
            return self.templates[kind]
        except KeyError as e:
            raise KeyError(f"unknown piece kind {kind!r}. known kinds={list(self.kind_order)!r}") from e

    def shape(self, kind: str) -> np.ndarray:
        return self.get(kind).shape

    def color_of(self, kind: str) -> str:
        return self.get(kind).color

    def colors(self) -> Tuple[str, ...]:
        return tuple(self.templates[k].color for k in self.kind_order)

    def random_template(self, rng: np.random.Generator) -> PieceTemplate:
        """
        Uniform pick for standalone callers.

        The game itself draws kinds through a PieceRule; UniformPieceRule makes
        the same draw, so one generator yields the same kinds either way.
        """
        i = int(rng.integers(0, len(self.kind_order)))
        return self.templates[self.kind_order[i]]
