"""Unit tests for single-entry archive framing."""

import os
import shutil
import struct
import tempfile
import time
import unittest
import zipfile
from unittest.mock import patch

from rawpack.archive import build_entry_info, write_archive_frame
from rawpack.core.config import Settings
from rawpack.core.exceptions import PackageIOError

LOCAL_HEADER_SIGNATURE = b"PK\x03\x04"


class TestArchiveFrame(unittest.TestCase):
    """Test cases for write_archive_frame."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.source_path = os.path.join(self.temp_dir, "IMG_0690.CR2")
        self.zip_path = os.path.join(self.temp_dir, "frame.zip")

        # Sensor-like data: all byte values, repeated so deflate would shrink it
        self.payload = bytes(range(256)) * 400
        with open(self.source_path, "wb") as f:
            f.write(self.payload)

        self.mtime = time.mktime((2019, 3, 7, 14, 25, 36, 0, 0, -1))
        os.utime(self.source_path, (self.mtime, self.mtime))

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    def test_single_stored_entry(self):
        """The frame holds exactly one uncompressed entry named after the file."""
        write_archive_frame(self.source_path, self.zip_path)

        with zipfile.ZipFile(self.zip_path) as zipf:
            infos = zipf.infolist()
            self.assertEqual(len(infos), 1)
            self.assertEqual(infos[0].filename, "IMG_0690.CR2")
            self.assertEqual(infos[0].compress_type, zipfile.ZIP_STORED)
            self.assertEqual(infos[0].compress_size, len(self.payload))

    def test_payload_is_verbatim(self):
        """The entry payload matches the source byte for byte."""
        write_archive_frame(self.source_path, self.zip_path)

        with zipfile.ZipFile(self.zip_path) as zipf:
            self.assertEqual(zipf.read("IMG_0690.CR2"), self.payload)

        # Stored data also appears unchanged in the raw ZIP bytes
        with open(self.zip_path, "rb") as f:
            self.assertIn(self.payload, f.read())

    def test_size_and_mtime_copied_from_source(self):
        """Entry metadata comes from the filesystem."""
        info = write_archive_frame(self.source_path, self.zip_path)

        self.assertEqual(info.file_size, os.path.getsize(self.source_path))
        self.assertEqual(info.date_time, (2019, 3, 7, 14, 25, 36))

        with zipfile.ZipFile(self.zip_path) as zipf:
            stored = zipf.getinfo("IMG_0690.CR2")
            self.assertEqual(stored.file_size, len(self.payload))
            self.assertEqual(stored.date_time, (2019, 3, 7, 14, 25, 36))

    def test_frame_starts_with_local_header(self):
        """A naive reader finds the local header at the start of the frame."""
        write_archive_frame(self.source_path, self.zip_path)

        with open(self.zip_path, "rb") as f:
            header = f.read(30)

        self.assertEqual(header[:4], LOCAL_HEADER_SIGNATURE)
        # compression method field, 0 = stored
        self.assertEqual(struct.unpack("<H", header[8:10])[0], 0)

    def test_pre_1980_mtime_is_clamped(self):
        """ZIP can't represent dates before 1980."""
        old = time.mktime((1975, 1, 1, 12, 0, 0, 0, 0, -1))
        os.utime(self.source_path, (old, old))

        info = build_entry_info(self.source_path)

        self.assertEqual(info.date_time, (1980, 1, 1, 0, 0, 0))

    def test_small_copy_buffer(self):
        """Chunk size doesn't change the payload."""
        write_archive_frame(self.source_path, self.zip_path, Settings(copy_buffer_size=7))

        with zipfile.ZipFile(self.zip_path) as zipf:
            self.assertEqual(zipf.read("IMG_0690.CR2"), self.payload)

    def test_missing_source_raises_io_error(self):
        """An unreadable source becomes a PackageIOError."""
        with self.assertRaises(PackageIOError):
            write_archive_frame(os.path.join(self.temp_dir, "missing.CR2"), self.zip_path)

    def test_unwritable_destination_raises_io_error(self):
        """A destination that can't be created becomes a PackageIOError."""
        destination = os.path.join(self.temp_dir, "no", "such", "dir", "frame.zip")
        with self.assertRaises(PackageIOError):
            write_archive_frame(self.source_path, destination)

    def test_oversized_source_raises_io_error(self):
        """Without ZIP64 a frame can't hold a source of 2 GiB or more."""
        info = build_entry_info(self.source_path)
        info.file_size = zipfile.ZIP64_LIMIT + 1
        with patch("rawpack.archive.frame.build_entry_info", return_value=info):
            with self.assertRaises(PackageIOError):
                write_archive_frame(self.source_path, self.zip_path)


if __name__ == '__main__':
    unittest.main()
