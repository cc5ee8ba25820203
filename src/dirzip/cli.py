"""CLI entry and startup wiring."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .archive_service import create_archive
from .constants import DEFAULT_ARCHIVE_NAME
from .errors import DirzipError
from .logging_utils import setup_logging
from .models import ArchiveResult
from .path_mapping import resolve_rename_zip_request, resolve_zip_request
from .presenters import (
    render_completion,
    render_error,
    render_restore_warning,
    render_skipped_entries,
)
from .progress import ConsoleProgressBar
from .rename_transaction import rename_and_archive


def main(argv: list[str] | None = None, *, invocation_dir_abs: Path | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    effective_invocation_dir = (
        invocation_dir_abs if invocation_dir_abs is not None else Path.cwd()
    )

    try:
        setup_logging(Path(args.log_file) if args.log_file else None)
    except OSError as exc:
        print(render_error(f"Failed to open log file: {exc}"), file=sys.stderr)
        return 1

    try:
        if args.command == "zip":
            return _run_zip(args, effective_invocation_dir)
        return _run_rename_zip(args, effective_invocation_dir)
    except DirzipError as exc:
        print(render_error(str(exc)), file=sys.stderr)
        return 1


def _run_zip(args: argparse.Namespace, invocation_dir_abs: Path) -> int:
    zip_request = resolve_zip_request(
        dir_arg_raw=args.dir,
        filename_arg_raw=args.filename,
        ignore_args_raw=args.ignore,
        extra_args_raw=args.extra,
        windows_style=args.windows_style,
        invocation_dir_abs=invocation_dir_abs,
    )
    progress_bar = ConsoleProgressBar()
    archive_result = create_archive(zip_request, on_progress=progress_bar.set_progress)
    progress_bar.mark_as_completed()
    _print_archive_summary(archive_result)
    return 0


def _run_rename_zip(args: argparse.Namespace, invocation_dir_abs: Path) -> int:
    request = resolve_rename_zip_request(
        dir_arg_raw=args.dir,
        new_name_raw=args.new_name,
        windows_style=args.windows_style,
        invocation_dir_abs=invocation_dir_abs,
    )
    progress_bar = ConsoleProgressBar()

    def _on_restore_failed(reason: str) -> None:
        progress_bar.mark_as_completed()
        print(
            render_restore_warning(
                renamed_dir_abs=request.renamed_dir_abs,
                original_dir_abs=request.original_dir_abs,
                reason=reason,
            ),
            file=sys.stderr,
        )

    result = rename_and_archive(
        request,
        on_progress=progress_bar.set_progress,
        on_restore_failed=_on_restore_failed,
    )
    progress_bar.mark_as_completed()
    _print_archive_summary(result.archive_result)
    return 0


def _print_archive_summary(archive_result: ArchiveResult) -> None:
    for line in render_skipped_entries(archive_result):
        print(line)
    print(render_completion(archive_result))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirzip",
        description="Archive a directory into a zip file.",
    )
    parser.add_argument(
        "--log-file",
        required=False,
        help="Optional path of a log file. dirzip logs nothing when omitted.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    zip_parser = subparsers.add_parser("zip", help="Archive a directory.")
    zip_parser.add_argument(
        "-f",
        "--filename",
        default=DEFAULT_ARCHIVE_NAME,
        help=f"Output zip file name (default: {DEFAULT_ARCHIVE_NAME}).",
    )
    zip_parser.add_argument(
        "-d",
        "--dir",
        required=True,
        help="Directory to archive, relative to the current directory.",
    )
    zip_parser.add_argument(
        "-i",
        "--ignore",
        action="append",
        help="Path to exclude, relative to the current directory. Repeatable or comma-separated.",
    )
    zip_parser.add_argument(
        "-e",
        "--extra",
        action="append",
        help="Extra file to add, relative to the current directory or absolute. Repeatable or comma-separated.",
    )
    zip_parser.add_argument(
        "-w",
        "--windows-style",
        action="store_true",
        help="Wrap all entries in a folder named after the directory.",
    )

    rename_parser = subparsers.add_parser(
        "rename-zip",
        help="Rename a directory, archive it, then restore its name.",
    )
    rename_parser.add_argument(
        "-d",
        "--dir",
        required=True,
        help="Directory to rename and archive, relative to the current directory.",
    )
    rename_parser.add_argument(
        "-n",
        "--new-name",
        required=True,
        help="Temporary directory name (no path separators). The zip is named <new-name>.zip.",
    )
    rename_parser.add_argument(
        "-w",
        "--windows-style",
        action="store_true",
        help="Wrap all entries in a folder named after the new name.",
    )
    return parser
