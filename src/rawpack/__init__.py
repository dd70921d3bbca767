"""
rawpack: package camera RAW files as viewable JPEGs carrying the original.

A package is a JPEG thumbnail immediately followed by a stored ZIP archive
holding the untouched RAW file.
"""

__version__ = "1.0.0"

from rawpack.core.exceptions import (
    ArgumentError,
    DecodeError,
    PackageIOError,
    PathNotFoundError,
    RawPackError
)
from rawpack.packager import FolderWalker, Packager, PackageResult, PackageStatus, WalkSummary

__all__ = [
    '__version__',
    'RawPackError',
    'ArgumentError',
    'PathNotFoundError',
    'DecodeError',
    'PackageIOError',
    'Packager',
    'FolderWalker',
    'PackageResult',
    'PackageStatus',
    'WalkSummary'
]
