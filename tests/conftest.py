"""Shared fixtures for rawpack tests."""

import os
import struct
from datetime import datetime
from pathlib import Path

import pytest
from PIL import Image

from rawpack.core.config import Settings

# An even-seconds local timestamp survives ZIP's two-second resolution
SOURCE_MTIME = datetime(2021, 6, 15, 10, 30, 20).timestamp()


def make_source_image(path: Path, size=(1200, 800), color=(200, 40, 40), fmt="PNG") -> Path:
    """Write an image that stands in for a RAW file and pin its mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, format=fmt)
    os.utime(path, (SOURCE_MTIME, SOURCE_MTIME))
    return path


# struct codes by TIFF field type; ASCII (2) is written as raw bytes
_TIFF_FORMATS = {1: "B", 3: "H", 4: "I", 5: "I", 10: "i"}


def _tiff_value(field_type, values):
    if field_type == 2:
        return len(values), values
    data = struct.pack(f"<{len(values)}{_TIFF_FORMATS[field_type]}", *values)
    count = len(values) // 2 if field_type in (5, 10) else len(values)
    return count, data


def make_linear_dng(path: Path, width=32, height=24) -> Path:
    """
    Write a tiny uncompressed LinearRaw DNG.

    Three 16-bit samples per pixel and no CFA pattern, so LibRaw loads it
    without demosaicing. Red grows to the right, green grows downwards.
    """
    pixels = b"".join(
        struct.pack("<3H", 4000 + x * 1800, 4000 + y * 2400, 20000)
        for y in range(height)
        for x in range(width)
    )
    tags = [
        (254, 4, [0]),                       # NewSubfileType: main image
        (256, 4, [width]),
        (257, 4, [height]),
        (258, 3, [16, 16, 16]),
        (259, 3, [1]),                       # uncompressed
        (262, 3, [34892]),                   # LinearRaw
        (271, 2, b"rawpack\0"),
        (272, 2, b"Linear Test\0"),
        (273, 4, [0]),                       # StripOffsets, set once the layout is known
        (274, 3, [1]),
        (277, 3, [3]),
        (278, 4, [height]),
        (279, 4, [len(pixels)]),
        (284, 3, [1]),
        (50706, 1, [1, 4, 0, 0]),            # DNGVersion
        (50707, 1, [1, 1, 0, 0]),            # DNGBackwardVersion
        (50708, 2, b"rawpack Linear Test\0"),
        (50721, 10, [1, 1, 0, 1, 0, 1,
                     0, 1, 1, 1, 0, 1,
                     0, 1, 0, 1, 1, 1]),     # ColorMatrix1
        (50728, 5, [1, 1, 1, 1, 1, 1]),      # AsShotNeutral
        (50778, 3, [21]),                    # CalibrationIlluminant1: D65
    ]

    extra_offset = 8 + 2 + 12 * len(tags) + 4
    entries = []
    extra = b""
    for tag, field_type, values in tags:
        count, data = _tiff_value(field_type, values)
        if len(data) <= 4:
            entries.append(struct.pack("<HHI", tag, field_type, count) + data.ljust(4, b"\0"))
        else:
            entries.append(struct.pack("<HHII", tag, field_type, count, extra_offset + len(extra)))
            extra += data
            if len(extra) % 2:
                extra += b"\0"

    strip_offset = extra_offset + len(extra)
    entries[[t[0] for t in tags].index(273)] = struct.pack("<HHII", 273, 4, 1, strip_offset)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.write(b"II*\0" + struct.pack("<I", 8))
        f.write(struct.pack("<H", len(entries)) + b"".join(entries) + struct.pack("<I", 0))
        f.write(extra)
        f.write(pixels)
    return path


@pytest.fixture
def settings(tmp_path) -> Settings:
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    return Settings(temp_dir=str(temp_dir))


@pytest.fixture
def source_image(tmp_path) -> Path:
    return make_source_image(tmp_path / "src" / "a.cr2")


@pytest.fixture
def corrupt_source(tmp_path) -> Path:
    path = tmp_path / "src" / "b.cr2"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


@pytest.fixture
def make_image():
    return make_source_image


@pytest.fixture
def linear_dng(tmp_path) -> Path:
    return make_linear_dng(tmp_path / "src" / "linear.dng")
