"""Archive workflow orchestration."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from .entry_naming import entry_name_for
from .errors import SourceReadError
from .logging_utils import log_event
from .models import ArchiveResult, EntryCandidate, ExtraFileBinding, SkippedEntry, ZipRequest
from .path_matcher import PathMatcher, is_same_file
from .progress import ProgressAccountant, count_eligible_files
from .tree_walker import walk_tree
from .zip_gateway import ZipWriter

logger = logging.getLogger(__name__)

SKIP_REASON_IGNORED_DIRECTORY = "ignored directory"
SKIP_REASON_IGNORED = "ignored"
SKIP_REASON_DESTINATION = "destination archive"
SKIP_REASON_UNREADABLE = "unreadable"


def build_archive(
    *,
    zip_path_abs: Path,
    root_dir_abs: Path,
    matcher: PathMatcher,
    windows_style: bool = False,
    extra_files: Sequence[ExtraFileBinding] = (),
    on_progress: Callable[[int], None] | None = None,
) -> ArchiveResult:
    """Write *root_dir_abs* and the extra files into a new zip at *zip_path_abs*.

    The tree is walked twice: a dry pass fixes the progress total, then the
    write pass streams entries. Only files count as processed. Raises
    ArchiveOpenError before touching the tree if the zip cannot be created.
    """
    skipped_entries: list[SkippedEntry] = []

    def _on_ignored(candidate: EntryCandidate) -> None:
        reason = SKIP_REASON_IGNORED_DIRECTORY if candidate.is_dir else SKIP_REASON_IGNORED
        skipped_entries.append(SkippedEntry(path=candidate.path_rel, reason=reason))
        log_event("archive_skip", logger=logger, path=candidate.path_rel, reason=reason)

    def _record_unreadable(path: Path, exc: SourceReadError) -> None:
        skipped_entries.append(SkippedEntry(path=path, reason=SKIP_REASON_UNREADABLE))
        log_event(
            "archive_skip",
            logging.WARNING,
            logger=logger,
            path=path,
            reason=SKIP_REASON_UNREADABLE,
            error=exc.__cause__,
        )

    with ZipWriter(zip_path_abs) as writer:
        total = count_eligible_files(
            walk_tree(root_dir_abs, matcher),
            zip_path_abs=zip_path_abs,
            extra_file_count=len(extra_files),
        )
        accountant = ProgressAccountant(total, on_progress)
        log_event(
            "archive_start",
            logger=logger,
            root=root_dir_abs,
            zip_path=zip_path_abs,
            total=total,
            windows_style=windows_style,
        )

        for candidate in walk_tree(root_dir_abs, matcher, on_ignored=_on_ignored):
            entry_name = entry_name_for(candidate, root_dir_abs, windows_style)
            if candidate.is_dir:
                writer.write_directory(entry_name)
                continue
            if is_same_file(candidate.path_abs, zip_path_abs):
                skipped_entries.append(
                    SkippedEntry(path=candidate.path_rel, reason=SKIP_REASON_DESTINATION)
                )
                continue
            try:
                writer.write_file(candidate.path_abs, entry_name)
            except SourceReadError as exc:
                _record_unreadable(candidate.path_rel, exc)
                continue
            accountant.on_file_written()

        for binding in extra_files:
            if not binding.source_abs.is_file():
                logger.info("Extra file vanished, skipping: %s", binding.source_abs)
                continue
            if is_same_file(binding.source_abs, zip_path_abs):
                skipped_entries.append(
                    SkippedEntry(path=binding.source_abs, reason=SKIP_REASON_DESTINATION)
                )
                continue
            try:
                writer.write_file(binding.source_abs, binding.entry_name)
            except SourceReadError as exc:
                _record_unreadable(binding.source_abs, exc)
                continue
            accountant.on_file_written()

    log_event(
        "archive_done",
        logger=logger,
        zip_path=zip_path_abs,
        processed=accountant.processed,
        total=total,
    )
    return ArchiveResult(
        zip_path=zip_path_abs,
        processed_count=accountant.processed,
        total_count=total,
        skipped_entries=skipped_entries,
    )


def create_archive(
    zip_request: ZipRequest,
    *,
    on_progress: Callable[[int], None] | None = None,
) -> ArchiveResult:
    matcher = PathMatcher(zip_request.ignore_paths_abs)
    return build_archive(
        zip_path_abs=zip_request.zip_path_abs,
        root_dir_abs=zip_request.root_dir_abs,
        matcher=matcher,
        windows_style=zip_request.windows_style,
        extra_files=zip_request.extra_files,
        on_progress=on_progress,
    )
