"""
Error types raised while packaging RAW files.

Argument and path errors stop a run before any file is touched. Decode and
I/O errors belong to a single file; the folder walker records them and moves on.
"""


class RawPackError(Exception):
    """Base class for all rawpack errors."""


class ArgumentError(RawPackError):
    """Missing or invalid command-line input."""


class PathNotFoundError(RawPackError):
    """A source or output directory does not exist or cannot be used."""

    def __init__(self, path, reason: str = ""):
        self.path = path
        message = f"Path '{path}' does not exist or is not a directory"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DecodeError(RawPackError):
    """The source file could not be interpreted as an image."""

    def __init__(self, path, reason: str = ""):
        self.path = path
        message = f"Cannot decode '{path}' as an image"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PackageIOError(RawPackError, OSError):
    """Reading the source, writing a temporary file or moving the result failed."""
