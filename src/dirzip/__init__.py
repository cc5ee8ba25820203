"""Archive a directory tree into a zip file."""

__version__ = "0.1.0"
