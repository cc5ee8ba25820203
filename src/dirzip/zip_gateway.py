"""Append-only zip writing."""

from __future__ import annotations

import os
import shutil
import stat
import zipfile
from pathlib import Path

from .constants import MSDOS_DIRECTORY_FLAG, WINDOWS_ENTRY_MODE
from .errors import ArchiveError, ArchiveOpenError, SourceReadError

_COPY_CHUNK_SIZE = 1024 * 1024


class ZipWriter:
    """Writes zip entries one at a time into a freshly created archive."""

    def __init__(self, zip_path_abs: Path) -> None:
        self._zip_path_abs = zip_path_abs
        self._zip_file: zipfile.ZipFile | None = None

    @property
    def zip_path_abs(self) -> Path:
        return self._zip_path_abs

    def open(self) -> None:
        try:
            self._zip_file = zipfile.ZipFile(
                self._zip_path_abs, mode="w", compression=zipfile.ZIP_DEFLATED
            )
        except OSError as exc:
            raise ArchiveOpenError(
                f"Failed to open archive for writing: {self._zip_path_abs}"
            ) from exc

    def close(self) -> None:
        if self._zip_file is None:
            return
        try:
            self._zip_file.close()
        except OSError as exc:
            raise ArchiveError(f"Failed to finalize archive: {self._zip_path_abs}") from exc
        finally:
            self._zip_file = None

    def __enter__(self) -> ZipWriter:
        self.open()
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def write_directory(self, entry_name: str) -> None:
        zip_info = zipfile.ZipInfo(entry_name.rstrip("/") + "/")
        if os.name == "nt":
            zip_info.external_attr = (
                (stat.S_IFDIR | WINDOWS_ENTRY_MODE) << 16
            ) | MSDOS_DIRECTORY_FLAG
        self._require_open().writestr(zip_info, b"")

    def write_file(self, source_abs: Path, entry_name: str) -> None:
        """Stream *source_abs* into a new entry.

        Raises SourceReadError, with no entry written, when the source cannot
        be stat'ed or opened. Timestamps before 1980 are clamped.
        """
        zip_file = self._require_open()
        try:
            zip_info = zipfile.ZipInfo.from_file(
                source_abs, arcname=entry_name, strict_timestamps=False
            )
            source = open(source_abs, "rb")
        except OSError as exc:
            raise SourceReadError(f"Failed to read source file: {source_abs}") from exc

        zip_info.compress_type = zipfile.ZIP_DEFLATED
        if os.name == "nt":
            zip_info.external_attr = (stat.S_IFREG | WINDOWS_ENTRY_MODE) << 16
        try:
            with source, zip_file.open(zip_info, mode="w") as target:
                shutil.copyfileobj(source, target, _COPY_CHUNK_SIZE)
        except OSError as exc:
            raise ArchiveError(f"Failed to add file to archive: {source_abs}") from exc

    def _require_open(self) -> zipfile.ZipFile:
        if self._zip_file is None:
            raise ArchiveError(f"Archive is not open: {self._zip_path_abs}")
        return self._zip_file
