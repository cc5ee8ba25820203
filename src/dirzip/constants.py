"""Literal constants used by dirzip."""

DEFAULT_ARCHIVE_NAME = "output.zip"
ARCHIVE_SUFFIX = ".zip"

# Progress is redrawn every N archived files and on the final one.
PROGRESS_NOTIFY_INTERVAL = 50

RESERVED_NAME_CHARS = frozenset({"\\", "/", ":", "\0"})
RESERVED_NAMES = frozenset({".", ".."})

WINDOWS_ENTRY_MODE = 0o755
MSDOS_DIRECTORY_FLAG = 0x10

PROGRESS_BAR_WIDTH = 50
PROGRESS_BAR_START = "["
PROGRESS_BAR_END = "]"
PROGRESS_BAR_FILL = "="
PROGRESS_BAR_LEAD = ">"
PROGRESS_BAR_REMAINDER = " "
PROGRESS_BAR_LABEL = "Compressing"

WARNING_PREFIX = "WARNING:"
ERROR_PREFIX = "ERROR:"
