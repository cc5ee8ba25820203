"""Progress accounting and console progress rendering."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TextIO

from .constants import (
    PROGRESS_BAR_END,
    PROGRESS_BAR_FILL,
    PROGRESS_BAR_LABEL,
    PROGRESS_BAR_LEAD,
    PROGRESS_BAR_REMAINDER,
    PROGRESS_BAR_START,
    PROGRESS_BAR_WIDTH,
    PROGRESS_NOTIFY_INTERVAL,
)
from .models import EntryCandidate
from .path_matcher import is_same_file


def count_eligible_files(
    candidates: Iterable[EntryCandidate],
    *,
    zip_path_abs: Path,
    extra_file_count: int,
) -> int:
    """Count files the write pass will archive, plus every extra file.

    Directories never count. Neither does the destination archive itself.
    """
    total = extra_file_count
    for candidate in candidates:
        if candidate.is_dir:
            continue
        if is_same_file(candidate.path_abs, zip_path_abs):
            continue
        total += 1
    return total


class ProgressAccountant:
    """Counts written files and throttles percentage notifications."""

    def __init__(
        self,
        total: int,
        on_progress: Callable[[int], None] | None = None,
        *,
        interval: int = PROGRESS_NOTIFY_INTERVAL,
    ) -> None:
        self._total = total
        self._processed = 0
        self._on_progress = on_progress
        self._interval = interval

    @property
    def total(self) -> int:
        return self._total

    @property
    def processed(self) -> int:
        return self._processed

    def on_file_written(self) -> None:
        self._processed += 1
        if self._total <= 0 or self._on_progress is None:
            return
        if self._processed % self._interval == 0 or self._processed == self._total:
            self._on_progress(min(self._processed * 100 // self._total, 100))


class ConsoleProgressBar:
    """Renders a single-line percentage bar in place on the terminal."""

    def __init__(
        self,
        *,
        width: int = PROGRESS_BAR_WIDTH,
        label: str = PROGRESS_BAR_LABEL,
        stream: TextIO | None = None,
    ) -> None:
        self._width = width
        self._label = label
        self._stream = stream if stream is not None else sys.stdout
        self._percent = 0
        self._completed = False

    @property
    def percent(self) -> int:
        return self._percent

    @property
    def is_completed(self) -> bool:
        return self._completed

    def set_progress(self, percent: int) -> None:
        if self._completed:
            return
        self._percent = max(0, min(percent, 100))
        self._draw()

    def mark_as_completed(self) -> None:
        if self._completed:
            return
        self._percent = 100
        self._draw()
        self._stream.write("\n")
        self._stream.flush()
        self._completed = True

    def render_line(self) -> str:
        filled = self._width * self._percent // 100
        if filled >= self._width:
            bar = PROGRESS_BAR_FILL * self._width
        else:
            bar = (
                PROGRESS_BAR_FILL * filled
                + PROGRESS_BAR_LEAD
                + PROGRESS_BAR_REMAINDER * (self._width - filled - 1)
            )
        return f"{PROGRESS_BAR_START}{bar}{PROGRESS_BAR_END} {self._percent}% {self._label}"

    def _draw(self) -> None:
        self._stream.write(f"\r{self.render_line()}")
        self._stream.flush()
