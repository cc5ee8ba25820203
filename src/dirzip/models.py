"""Dataclasses shared across dirzip layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class EntryKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class EntryCandidate:
    path_abs: Path
    path_rel: Path
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class ExtraFileBinding:
    source_abs: Path
    entry_name: str


@dataclass(frozen=True)
class ZipRequest:
    root_dir_abs: Path
    zip_path_abs: Path
    ignore_paths_abs: list[Path]
    extra_files: list[ExtraFileBinding]
    windows_style: bool


@dataclass(frozen=True)
class RenameZipRequest:
    original_dir_abs: Path
    renamed_dir_abs: Path
    zip_path_abs: Path
    windows_style: bool


@dataclass(frozen=True)
class SkippedEntry:
    path: Path
    reason: str


@dataclass(frozen=True)
class ArchiveResult:
    zip_path: Path
    processed_count: int
    total_count: int
    skipped_entries: list[SkippedEntry] = field(default_factory=list)


@dataclass(frozen=True)
class RenameZipResult:
    archive_result: ArchiveResult
    original_dir_abs: Path
    renamed_dir_abs: Path
    restored: bool
    restore_error: str | None = None
