from __future__ import annotations

import os
import zipfile
from pathlib import Path

import pytest

from dirzip.errors import ArchiveError, ArchiveOpenError, SourceReadError
from dirzip.zip_gateway import ZipWriter


def test_zip_writer_streams_files_and_directory_entries(tmp_path: Path) -> None:
    source = tmp_path / "data.bin"
    source.write_bytes(b"\x00\x01" * 1000)
    zip_path = tmp_path / "out.zip"

    with ZipWriter(zip_path) as writer:
        writer.write_directory("folder")
        writer.write_file(source, "folder/data.bin")

    with zipfile.ZipFile(zip_path, mode="r") as zf:
        assert zf.namelist() == ["folder/", "folder/data.bin"]
        assert zf.getinfo("folder/").is_dir()
        assert zf.read("folder/data.bin") == b"\x00\x01" * 1000


def test_zip_writer_open_failure_raises_archive_open_error(tmp_path: Path) -> None:
    writer = ZipWriter(tmp_path / "no-such-dir" / "out.zip")

    with pytest.raises(ArchiveOpenError):
        writer.open()


def test_zip_writer_rejects_writes_when_closed(tmp_path: Path) -> None:
    writer = ZipWriter(tmp_path / "out.zip")

    with pytest.raises(ArchiveError, match="not open"):
        writer.write_directory("folder/")


def test_zip_writer_missing_source_leaves_no_entry(tmp_path: Path) -> None:
    with ZipWriter(tmp_path / "out.zip") as writer:
        with pytest.raises(SourceReadError, match="Failed to read source file"):
            writer.write_file(tmp_path / "missing.txt", "missing.txt")

    with zipfile.ZipFile(tmp_path / "out.zip", mode="r") as zf:
        assert zf.namelist() == []


def test_zip_writer_clamps_timestamps_before_1980(tmp_path: Path) -> None:
    source = tmp_path / "old.txt"
    source.write_text("old", encoding="utf-8")
    os.utime(source, (0, 0))
    zip_path = tmp_path / "out.zip"

    with ZipWriter(zip_path) as writer:
        writer.write_file(source, "old.txt")

    with zipfile.ZipFile(zip_path, mode="r") as zf:
        assert zf.read("old.txt") == b"old"
        assert zf.getinfo("old.txt").date_time == (1980, 1, 1, 0, 0, 0)
