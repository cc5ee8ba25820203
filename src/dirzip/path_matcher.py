"""Filesystem-identity path matching."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path


def canonicalize(raw_path: str | Path, base_dir_abs: Path) -> Path:
    """Resolve *raw_path* against *base_dir_abs*; missing tails are kept as-is."""
    return (base_dir_abs / raw_path).resolve(strict=False)


def is_same_file(first: Path, second: Path) -> bool:
    """True iff both paths resolve to the same underlying file or directory.

    Paths that cannot be stat'ed (missing, dangling link, permission denied)
    never match.
    """
    try:
        return os.path.samefile(first, second)
    except (OSError, ValueError):
        return False


class PathMatcher:
    """Answers whether a filesystem entry is one of a fixed set of targets."""

    def __init__(self, targets_abs: Iterable[Path]) -> None:
        self._targets_abs = tuple(targets_abs)

    def matches(self, candidate_abs: Path) -> bool:
        if not self._targets_abs:
            return False
        return any(is_same_file(candidate_abs, target) for target in self._targets_abs)
