"""Rename a directory, archive it, then put the original name back."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from .archive_service import build_archive
from .errors import RenameError
from .logging_utils import log_event
from .models import RenameZipRequest, RenameZipResult
from .path_matcher import PathMatcher

logger = logging.getLogger(__name__)


class TransactionState(Enum):
    IDLE = "idle"
    RENAMED = "renamed"
    ARCHIVED = "archived"
    RESTORED = "restored"
    FAILED = "failed"


def rename_directory(source_abs: Path, target_abs: Path) -> None:
    source_abs.rename(target_abs)


class RenameTransaction:
    """Context manager that renames on entry and always tries to restore on exit.

    A failed restore is recorded on ``restore_error`` and reported through
    *on_restore_failed*; it never raises, so an exception from the body is
    not masked.
    """

    def __init__(
        self,
        original_dir_abs: Path,
        renamed_dir_abs: Path,
        *,
        on_restore_failed: Callable[[str], None] | None = None,
    ) -> None:
        self.original_dir_abs = original_dir_abs
        self.renamed_dir_abs = renamed_dir_abs
        self.state = TransactionState.IDLE
        self.restore_error: str | None = None
        self._on_restore_failed = on_restore_failed

    def __enter__(self) -> RenameTransaction:
        self.rename()
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.restore()

    def rename(self) -> None:
        if self.state is not TransactionState.IDLE:
            raise RenameError(f"Rename already attempted: {self.original_dir_abs}")
        try:
            rename_directory(self.original_dir_abs, self.renamed_dir_abs)
        except OSError as exc:
            self.state = TransactionState.FAILED
            raise RenameError(
                f"Failed to rename {self.original_dir_abs} to {self.renamed_dir_abs}: {exc}"
            ) from exc
        self.state = TransactionState.RENAMED
        log_event(
            "rename_done",
            logger=logger,
            source=self.original_dir_abs,
            target=self.renamed_dir_abs,
        )

    def mark_archived(self) -> None:
        if self.state is TransactionState.RENAMED:
            self.state = TransactionState.ARCHIVED

    def restore(self) -> bool:
        if self.state not in (TransactionState.RENAMED, TransactionState.ARCHIVED):
            return self.state is TransactionState.RESTORED
        try:
            rename_directory(self.renamed_dir_abs, self.original_dir_abs)
        except OSError as exc:
            # No retry; the directory stays under the new name.
            self.restore_error = str(exc)
            log_event(
                "restore_failed",
                logging.WARNING,
                logger=logger,
                source=self.renamed_dir_abs,
                target=self.original_dir_abs,
                error=self.restore_error,
            )
            if self._on_restore_failed is not None:
                self._on_restore_failed(self.restore_error)
            return False
        self.state = TransactionState.RESTORED
        log_event(
            "restore_done",
            logger=logger,
            source=self.renamed_dir_abs,
            target=self.original_dir_abs,
        )
        return True


def rename_and_archive(
    request: RenameZipRequest,
    *,
    on_progress: Callable[[int], None] | None = None,
    on_restore_failed: Callable[[str], None] | None = None,
) -> RenameZipResult:
    transaction = RenameTransaction(
        request.original_dir_abs,
        request.renamed_dir_abs,
        on_restore_failed=on_restore_failed,
    )
    with transaction:
        archive_result = build_archive(
            zip_path_abs=request.zip_path_abs,
            root_dir_abs=request.renamed_dir_abs,
            matcher=PathMatcher(()),
            windows_style=request.windows_style,
            on_progress=on_progress,
        )
        transaction.mark_archived()

    return RenameZipResult(
        archive_result=archive_result,
        original_dir_abs=request.original_dir_abs,
        renamed_dir_abs=request.renamed_dir_abs,
        restored=transaction.state is TransactionState.RESTORED,
        restore_error=transaction.restore_error,
    )
