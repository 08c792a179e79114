"""Target path handling.

Paths typed by the user or printed by cleartool are normalised so that
``./foo``, ``foo`` and ``.\\foo`` compare equal.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator


def normalize_path(path: str | os.PathLike[str]) -> Path:
    """Canonicalise separators and strip any leading ``./`` markers.

    Idempotent: normalising an already-normalised path returns an equal path.
    """
    text = os.fspath(path).replace("\\", "/")
    while text.startswith("./"):
        text = text[2:].lstrip("/")
    return Path(text) if text else Path(".")


class TargetList:
    """Ordered sequence of normalised target paths."""

    def __init__(self, targets: Iterable[str | os.PathLike[str]] = ()):
        self._paths: list[Path] = [normalize_path(t) for t in targets]

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __bool__(self) -> bool:
        return bool(self._paths)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TargetList):
            return self._paths == other._paths
        return NotImplemented

    def __repr__(self) -> str:
        return f"TargetList({[str(p) for p in self._paths]!r})"

    def __str__(self) -> str:
        return " ".join(f"'{p}'" for p in self._paths)

    def as_args(self) -> list[str]:
        """Paths as command-line arguments."""
        return [str(p) for p in self._paths]

    def parents(self) -> TargetList:
        """Parent directories of every target, first occurrence order, no duplicates."""
        seen: dict[Path, None] = {}
        for path in self._paths:
            seen.setdefault(path.parent, None)
        return TargetList(seen)
