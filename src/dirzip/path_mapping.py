"""Command-line path resolution and startup validation."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from .constants import ARCHIVE_SUFFIX, RESERVED_NAME_CHARS, RESERVED_NAMES
from .entry_naming import extra_entry_name
from .errors import StartupValidationError
from .models import ExtraFileBinding, RenameZipRequest, ZipRequest
from .path_matcher import canonicalize


def resolve_zip_request(
    *,
    dir_arg_raw: str,
    filename_arg_raw: str,
    ignore_args_raw: Iterable[str] | None,
    extra_args_raw: Iterable[str] | None,
    windows_style: bool,
    invocation_dir_abs: Path,
) -> ZipRequest:
    _validate_invocation_dir(invocation_dir_abs)

    root_dir_abs = canonicalize(dir_arg_raw, invocation_dir_abs)
    _validate_directory(root_dir_abs, argument_name="--dir")

    if filename_arg_raw.strip() == "":
        raise StartupValidationError("--filename must not be empty.")

    ignore_paths_abs = [
        canonicalize(raw_path, invocation_dir_abs)
        for raw_path in split_list_arguments(ignore_args_raw)
    ]
    extra_files = [
        resolve_extra_file(raw_path, invocation_dir_abs)
        for raw_path in split_list_arguments(extra_args_raw)
    ]

    return ZipRequest(
        root_dir_abs=root_dir_abs,
        zip_path_abs=canonicalize(filename_arg_raw, invocation_dir_abs),
        ignore_paths_abs=ignore_paths_abs,
        extra_files=extra_files,
        windows_style=windows_style,
    )


def resolve_rename_zip_request(
    *,
    dir_arg_raw: str,
    new_name_raw: str,
    windows_style: bool,
    invocation_dir_abs: Path,
) -> RenameZipRequest:
    _validate_invocation_dir(invocation_dir_abs)

    original_dir_abs = canonicalize(dir_arg_raw, invocation_dir_abs)
    _validate_directory(original_dir_abs, argument_name="--dir")
    validate_new_name(new_name_raw)

    renamed_dir_abs = original_dir_abs.parent / new_name_raw
    if os.path.lexists(renamed_dir_abs):
        raise StartupValidationError(f"Rename target already exists: {renamed_dir_abs}")

    return RenameZipRequest(
        original_dir_abs=original_dir_abs,
        renamed_dir_abs=renamed_dir_abs,
        zip_path_abs=invocation_dir_abs / f"{new_name_raw}{ARCHIVE_SUFFIX}",
        windows_style=windows_style,
    )


def resolve_extra_file(raw_path: str, invocation_dir_abs: Path) -> ExtraFileBinding:
    source_abs = canonicalize(raw_path, invocation_dir_abs)
    if not source_abs.exists():
        raise StartupValidationError(f"Extra file does not exist: {source_abs}")
    if not source_abs.is_file():
        raise StartupValidationError(f"Extra file is not a regular file: {source_abs}")
    return ExtraFileBinding(
        source_abs=source_abs,
        entry_name=extra_entry_name(source_abs, invocation_dir_abs),
    )


def split_list_arguments(raw_values: Iterable[str] | None) -> list[str]:
    """Flatten repeated and comma-delimited option values, dropping empties."""
    if raw_values is None:
        return []
    items: list[str] = []
    for raw_value in raw_values:
        items.extend(item for item in raw_value.split(",") if item != "")
    return items


def validate_new_name(new_name: str) -> None:
    if new_name == "":
        raise StartupValidationError("--new-name must not be empty.")
    if new_name in RESERVED_NAMES or any(char in RESERVED_NAME_CHARS for char in new_name):
        raise StartupValidationError(
            f"--new-name must be a bare name without path separators or reserved characters: {new_name!r}"
        )


def _validate_invocation_dir(invocation_dir_abs: Path) -> None:
    if not invocation_dir_abs.is_absolute():
        raise StartupValidationError("Invocation directory must be an absolute path.")


def _validate_directory(dir_abs: Path, *, argument_name: str) -> None:
    if not dir_abs.exists():
        raise StartupValidationError(f"{argument_name} does not exist: {dir_abs}")
    if not dir_abs.is_dir():
        raise StartupValidationError(f"{argument_name} must be a directory: {dir_abs}")
