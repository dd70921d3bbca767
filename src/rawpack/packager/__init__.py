# src/rawpack/packager/__init__.py
from rawpack.packager.packager import Packager, combine_files
from rawpack.packager.reporter import (
    CollectingReporter,
    ConsoleReporter,
    LoggingReporter,
    Reporter
)
from rawpack.packager.schemas import PackageResult, PackageStatus, WalkSummary
from rawpack.packager.walker import FolderWalker

__all__ = [
    'Packager',
    'combine_files',
    'FolderWalker',
    'Reporter',
    'LoggingReporter',
    'ConsoleReporter',
    'CollectingReporter',
    'PackageResult',
    'PackageStatus',
    'WalkSummary'
]
