"""Typed exceptions for dirzip."""


class DirzipError(Exception):
    """Base exception for dirzip failures."""


class StartupValidationError(DirzipError):
    """Raised when command-line inputs are invalid."""


class ArchiveError(DirzipError):
    """Raised for archive workflow failures."""


class ArchiveOpenError(ArchiveError):
    """Raised when the destination archive cannot be opened for writing."""


class RenameError(DirzipError):
    """Raised when the source directory cannot be renamed."""


class SourceReadError(ArchiveError):
    """Raised when a single source file cannot be read for archiving."""
