"""Lockfile discovery utilities."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


EXCLUDES = {"node_modules", ".git", ".venv"}

LOCKFILE_NAMES = ("package-lock.json", "npm-shrinkwrap.json")


def discover_lockfiles(root: Path, names: Iterable[str] = LOCKFILE_NAMES) -> list[Path]:
    """Find npm lockfiles recursively under root (excluding vendor dirs).

    Paths are returned sorted so scans are reproducible.
    """
    root = root.resolve()
    targets = set(names)
    found: list[Path] = []

    def should_skip(p: Path) -> bool:
        parts = set(p.parts)
        return any(ex in parts for ex in EXCLUDES)

    for path in root.rglob("*"):
        if path.name not in targets:
            continue
        if not path.is_file():
            continue
        if should_skip(path.relative_to(root)):
            continue
        found.append(path)

    return sorted(found)
