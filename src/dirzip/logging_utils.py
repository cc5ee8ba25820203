"""Logging setup and structured event emission."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

_LOG_FORMAT = "%(levelname)s %(name)s %(message)s"
_PACKAGE_LOGGER_NAME = "dirzip"


def _to_log_safe(value: Any) -> Any:
    """Convert values to JSON-serializable, log-safe representations."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _to_log_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_log_safe(v) for v in value]
    return str(value)


def log_event(
    event: str,
    level: int = logging.INFO,
    *,
    logger: logging.Logger | None = None,
    **fields: Any,
) -> None:
    """Emit a structured log event."""
    payload: dict[str, Any] = {
        "ts": datetime.now().astimezone().isoformat(),
        "event": event,
    }
    for key, value in fields.items():
        payload[key] = _to_log_safe(value)
    target = logger if logger is not None else logging.getLogger()
    target.log(level, json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def setup_logging(log_file: Path | None = None) -> None:
    """Send logs to *log_file*, or keep dirzip quiet when no file is given.

    Without a file only a NullHandler is attached to the package logger, so
    logging configured by an embedding caller is left alone.
    """
    if log_file is None:
        package_logger = logging.getLogger(_PACKAGE_LOGGER_NAME)
        if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
            package_logger.addHandler(logging.NullHandler())
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(str(log_file), encoding="utf-8")
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logging.basicConfig(level=logging.INFO, handlers=[handler], force=True)
