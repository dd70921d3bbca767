# src/rawpack/archive/__init__.py
from rawpack.archive.frame import build_entry_info, write_archive_frame
from rawpack.archive.package_accessor import PackageAccessor

__all__ = [
    'build_entry_info',
    'write_archive_frame',
    'PackageAccessor'
]
