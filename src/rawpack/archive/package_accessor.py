"""Packaged file accessor component.

This module provides read-only access to packaged files: the leading
thumbnail image and the stored archive entry that follows it. It is used to
verify packages; it does not restore originals to disk.
"""

import io
import os
import time
import zipfile
from typing import Optional, List, Dict, Any, Union
from pathlib import Path

from PIL import Image


class PackageAccessor:
    """Class for inspecting a thumbnail + archive package."""

    def __init__(self, package_path: Union[str, Path]):
        """Initialize with path to a packaged file.

        Args:
            package_path: Path to the packaged image file

        Raises:
            FileNotFoundError: If the package file doesn't exist
            zipfile.BadZipFile: If no archive can be located in the file
        """
        self.package_path = str(package_path)

        if not os.path.exists(self.package_path):
            raise FileNotFoundError(f"Package file '{self.package_path}' not found")

        # Validate an archive can be found behind the thumbnail
        try:
            with zipfile.ZipFile(self.package_path, 'r'):
                pass
        except zipfile.BadZipFile:
            raise zipfile.BadZipFile(f"'{self.package_path}' does not contain an archive")

    def get_entries(self) -> List[Dict[str, Any]]:
        """List the archive entries in the package.

        Returns:
            List of entry dictionaries
        """
        with zipfile.ZipFile(self.package_path, 'r') as zipf:
            return [
                {
                    'name': info.filename,
                    'size': info.file_size,
                    'compressed_size': info.compress_size,
                    'compress_type': info.compress_type,
                    'date_time': info.date_time,
                    'crc': info.CRC,
                    'header_offset': info.header_offset
                }
                for info in zipf.infolist()
            ]

    def thumbnail_size(self) -> int:
        """Get the number of bytes that precede the archive.

        Python's zipfile corrects entry offsets for data prepended to an
        archive, so the first local header offset marks the end of the thumbnail.

        Returns:
            Size of the thumbnail in bytes
        """
        entries = self.get_entries()
        if not entries:
            return os.path.getsize(self.package_path)
        return min(entry['header_offset'] for entry in entries)

    def read_thumbnail_bytes(self) -> bytes:
        """Read the leading thumbnail bytes, excluding the archive."""
        with open(self.package_path, 'rb') as f:
            return f.read(self.thumbnail_size())

    def open_thumbnail(self) -> Image.Image:
        """Decode the thumbnail from the leading bytes alone.

        Returns:
            Pillow image of the thumbnail
        """
        image = Image.open(io.BytesIO(self.read_thumbnail_bytes()))
        image.load()
        return image

    def read_entry(self, name: Optional[str] = None) -> bytes:
        """Read the payload of an archive entry.

        Args:
            name: Entry name; defaults to the first (normally only) entry

        Returns:
            Entry payload bytes

        Raises:
            KeyError: If the entry doesn't exist in the package
        """
        with zipfile.ZipFile(self.package_path, 'r') as zipf:
            if name is None:
                names = zipf.namelist()
                if not names:
                    raise KeyError("Package archive is empty")
                name = names[0]
            return zipf.read(name)

    def verify_against(self, source_path: Union[str, Path]) -> Dict[str, Any]:
        """Compare the stored entry with the original source file.

        Args:
            source_path: Path to the original RAW file

        Returns:
            Dictionary of individual checks and an overall 'ok' flag
        """
        source_path = Path(source_path)
        stat = source_path.stat()

        matches = [e for e in self.get_entries() if e['name'] == source_path.name]
        if not matches:
            return {'entry_found': False, 'ok': False}
        entry = matches[0]

        # ZIP stores local time at two-second resolution
        mtime = time.localtime(stat.st_mtime)
        expected_date_time = tuple(mtime[:5]) + (mtime[5] // 2 * 2,)
        if expected_date_time[0] < 1980:
            expected_date_time = (1980, 1, 1, 0, 0, 0)

        result = {
            'entry_found': True,
            'stored': entry['compress_type'] == zipfile.ZIP_STORED,
            'size_match': entry['size'] == stat.st_size,
            'date_time_match': tuple(entry['date_time']) == expected_date_time,
            'content_match': self.read_entry(entry['name']) == source_path.read_bytes()
        }
        result['ok'] = all(result.values())
        return result

    def get_package_stats(self) -> Dict[str, Any]:
        """Get overall statistics about the package.

        Returns:
            Dictionary with package statistics
        """
        package_size = os.path.getsize(self.package_path)
        thumbnail_size = self.thumbnail_size()
        entries = self.get_entries()

        return {
            'package_size': package_size,
            'thumbnail_size': thumbnail_size,
            'archive_size': package_size - thumbnail_size,
            'entries': len(entries),
            'payload_size': sum(e['size'] for e in entries)
        }
