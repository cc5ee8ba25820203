"""User-facing text rendering."""

from __future__ import annotations

from pathlib import Path

from .constants import ERROR_PREFIX, WARNING_PREFIX
from .models import ArchiveResult, SkippedEntry


def render_error(message: str) -> str:
    return f"{ERROR_PREFIX} {message}"


def render_warning(message: str) -> str:
    return f"{WARNING_PREFIX} {message}"


def render_skipped_entry(skipped_entry: SkippedEntry) -> str:
    return f"Skipped ({skipped_entry.reason}): {skipped_entry.path.as_posix()}"


def render_skipped_entries(archive_result: ArchiveResult) -> list[str]:
    return [render_skipped_entry(entry) for entry in archive_result.skipped_entries]


def render_completion(archive_result: ArchiveResult) -> str:
    return (
        f"Done: processed {archive_result.processed_count} file(s), "
        f"output: {archive_result.zip_path}"
    )


def render_restore_warning(*, renamed_dir_abs: Path, original_dir_abs: Path, reason: str) -> str:
    return render_warning(
        "Could not restore the original directory name. "
        f"Rename '{renamed_dir_abs}' back to '{original_dir_abs}' manually. "
        f"Error: {reason}"
    )
