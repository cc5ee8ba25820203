"""Pre-order directory traversal with ignore pruning."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

from .errors import ArchiveError
from .models import EntryCandidate, EntryKind
from .path_matcher import PathMatcher

logger = logging.getLogger(__name__)


def walk_tree(
    root_dir_abs: Path,
    matcher: PathMatcher,
    *,
    on_ignored: Callable[[EntryCandidate], None] | None = None,
) -> Iterator[EntryCandidate]:
    """Yield every file and directory below *root_dir_abs* exactly once.

    Directories are yielded before their contents. Siblings come in name
    order. An ignored directory is reported through *on_ignored* and nothing
    below it is visited. Unreadable directories are skipped. Symlinks to
    directories are followed; a symlink cycle ends in RecursionError.
    """
    yield from _walk_dir(root_dir_abs, Path(), matcher, on_ignored)


def _walk_dir(
    current_dir_abs: Path,
    current_rel: Path,
    matcher: PathMatcher,
    on_ignored: Callable[[EntryCandidate], None] | None,
) -> Iterator[EntryCandidate]:
    try:
        with os.scandir(current_dir_abs) as scanner:
            children = sorted(scanner, key=lambda entry: entry.name)
    except PermissionError:
        logger.info("Skipping unreadable directory: %s", current_dir_abs)
        return
    except OSError as exc:
        raise ArchiveError(f"Failed to read directory: {current_dir_abs}") from exc

    for child in children:
        child_abs = current_dir_abs / child.name
        child_rel = current_rel / child.name

        if _is_dir(child):
            candidate = EntryCandidate(child_abs, child_rel, EntryKind.DIRECTORY)
            if matcher.matches(child_abs):
                if on_ignored is not None:
                    on_ignored(candidate)
                continue
            yield candidate
            yield from _walk_dir(child_abs, child_rel, matcher, on_ignored)
            continue

        candidate = EntryCandidate(child_abs, child_rel, EntryKind.FILE)
        if matcher.matches(child_abs):
            if on_ignored is not None:
                on_ignored(candidate)
            continue
        if not _is_file(child):
            logger.debug("Skipping non-regular entry: %s", child_abs)
            continue
        yield candidate


def _is_dir(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


def _is_file(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False
