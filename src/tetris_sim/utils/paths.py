# src/tetris_sim/utils/paths.py
from __future__ import annotations

from pathlib import Path


def package_root() -> Path:
    """
    Return the installed tetris_sim package directory.
    """
    return Path(__file__).resolve().parents[1]


def _find_repo_root(start: Path) -> Path | None:
    for p in [start, *start.parents]:
        if (p / "pyproject.toml").is_file():
            return p
    return None


def assets_dir() -> Path:
    """
    Return <package>/assets (must exist).
    """
    p = package_root() / "assets"
    if not p.is_dir():
        raise FileNotFoundError(f"Assets directory not found: {p}")
    return p


def pieces_dir() -> Path:
    """
    Return <package>/assets/pieces (must exist).
    """
    p = assets_dir() / "pieces"
    if not p.is_dir():
        raise FileNotFoundError(f"Pieces directory not found: {p}")
    return p


def resolve_config_path(raw: str) -> Path:
    """
    Resolve a config path that may be absolute, cwd-relative, or repo-relative.

    Tries candidates in a deterministic order.
    """
    s = str(raw).strip().strip('"').strip("'")
    if not s:
        raise ValueError("empty path")

    p_raw = Path(s)
    if p_raw.is_absolute():
        return p_raw.resolve()

    candidates: list[Path] = [p_raw.resolve()]
    root = _find_repo_root(Path(__file__).resolve().parent)
    if root is not None:
        candidates.append((root / p_raw).resolve())
        candidates.append((root / "configs" / p_raw).resolve())

    for cand in candidates:
        if cand.is_file():
            return cand

    tried = "\n".join(f"  - {c}" for c in candidates)
    raise FileNotFoundError(f"path not found. tried:\n{tried}")
