"""Archive entry naming."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

from .models import EntryCandidate


def entry_name_for(
    candidate: EntryCandidate, root_dir_abs: Path, windows_style: bool
) -> str:
    """Return the in-archive name for a tree candidate.

    Names are root-relative with forward slashes; directories end in "/".
    With *windows_style* every name is wrapped in a folder named after the root.
    """
    entry_name = candidate.path_rel.as_posix()
    if candidate.is_dir:
        entry_name = f"{entry_name}/"
    if windows_style:
        entry_name = f"{wrapper_folder_name(root_dir_abs)}/{entry_name}"
    return entry_name


def wrapper_folder_name(root_dir_abs: Path) -> str:
    return root_dir_abs.name


def extra_entry_name(source_abs: Path, base_dir_abs: Path) -> str:
    """Name an extra file by its path relative to *base_dir_abs*.

    Falls back to the bare file name when the source is outside the base
    tree or no relative path exists (different drives on Windows).
    """
    try:
        relative = os.path.relpath(source_abs, base_dir_abs.resolve(strict=False))
    except ValueError:
        return source_abs.name

    normalized = PurePosixPath(Path(os.path.normpath(relative)).as_posix())
    if not normalized.parts or normalized.parts[0] in (".", ".."):
        return source_abs.name
    return normalized.as_posix()
