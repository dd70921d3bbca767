"""
Thumbnail rendering for RAW files.

RAW files are decoded with LibRaw (via rawpy). Anything LibRaw does not
recognise is handed to Pillow, so ordinary JPEG/PNG/TIFF sources can be
packaged the same way.
"""

import io
import logging
from pathlib import Path
from typing import Optional, Union

import rawpy
from PIL import Image, UnidentifiedImageError

from rawpack.core.config import Settings, settings as default_settings
from rawpack.core.exceptions import DecodeError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _decode_embedded_preview(raw: "rawpy.RawPy") -> Optional[Image.Image]:
    """Return the camera's embedded preview, or None if the file has none."""
    try:
        thumb = raw.extract_thumb()
    except (rawpy.LibRawNoThumbnailError, rawpy.LibRawUnsupportedThumbnailError):
        return None

    if thumb.format == rawpy.ThumbFormat.JPEG:
        image = Image.open(io.BytesIO(thumb.data))
        image.load()
        return image
    return Image.fromarray(thumb.data)


def _decode_raw(source: Path, prefer_embedded_preview: bool) -> Image.Image:
    with rawpy.imread(str(source)) as raw:
        if prefer_embedded_preview:
            preview = _decode_embedded_preview(raw)
            if preview is not None:
                logger.debug(f"Using embedded preview for {source.name}")
                return preview
        rgb = raw.postprocess(use_camera_wb=True, output_bps=8)
    return Image.fromarray(rgb)


def _decode_raster(source: Path) -> Image.Image:
    with Image.open(source) as image:
        image.load()
        return image.copy()


def decode_image(source: PathLike, prefer_embedded_preview: bool = False) -> Image.Image:
    """
    Decode a source file into a Pillow image.

    Args:
        source: Path to a RAW or raster image file
        prefer_embedded_preview: Use the RAW's embedded preview when available

    Returns:
        The decoded image

    Raises:
        DecodeError: If neither LibRaw nor Pillow can read the file
    """
    source = Path(source)

    try:
        return _decode_raw(source, prefer_embedded_preview)
    except rawpy.LibRawError as raw_error:
        logger.debug(f"LibRaw could not read {source.name} ({raw_error}), trying Pillow")

    try:
        return _decode_raster(source)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeError(source, str(e)) from e


def render_thumbnail(
    source: PathLike,
    destination: PathLike,
    settings: Optional[Settings] = None
) -> Path:
    """
    Render a JPEG thumbnail of `source` into `destination`.

    The image is fitted into the configured thumbnail box with its aspect ratio
    preserved. Smaller images are not enlarged.

    Args:
        source: Path to the RAW file
        destination: Path the JPEG is written to
        settings: Optional settings, defaults to the module-level settings

    Returns:
        The destination path

    Raises:
        DecodeError: If the source cannot be interpreted as an image
    """
    settings = settings or default_settings
    destination = Path(destination)

    image = decode_image(source, settings.prefer_embedded_preview)
    image.thumbnail(settings.thumbnail_size, Image.Resampling.LANCZOS)
    if image.mode != "RGB":
        image = image.convert("RGB")

    image.save(destination, format="JPEG", quality=settings.thumbnail_quality)
    logger.debug(f"Rendered {image.width}x{image.height} thumbnail for {Path(source).name}")
    return destination
