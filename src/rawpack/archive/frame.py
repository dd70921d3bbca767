"""Single-entry ZIP framing for RAW files.

The frame stores the original file verbatim (no deflate) so that the bytes
appended behind a thumbnail can be recovered exactly.
"""

import logging
import shutil
import zipfile
from pathlib import Path
from typing import Optional, Union

from rawpack.core.config import Settings, settings as default_settings
from rawpack.core.exceptions import PackageIOError

logger = logging.getLogger(__name__)


def build_entry_info(source: Union[str, Path]) -> zipfile.ZipInfo:
    """Build the ZIP entry header for a source file.

    The entry takes its name from the file's base name and its modification
    time and size from the filesystem. Timestamps before 1980, which ZIP
    cannot represent, are clamped to 1980-01-01.

    Args:
        source: Path to the file being framed

    Returns:
        ZipInfo configured for a stored entry
    """
    source = Path(source)
    info = zipfile.ZipInfo.from_file(source, arcname=source.name, strict_timestamps=False)
    info.compress_type = zipfile.ZIP_STORED
    return info


def write_archive_frame(
    source: Union[str, Path],
    destination: Union[str, Path],
    settings: Optional[Settings] = None
) -> zipfile.ZipInfo:
    """Write `source` into a new stored, single-entry ZIP at `destination`.

    Args:
        source: Path to the file to frame
        destination: Path of the ZIP file to create (overwritten if present)
        settings: Optional settings, defaults to the module-level settings

    Returns:
        The ZipInfo of the written entry

    Raises:
        PackageIOError: If the source can't be read or the ZIP can't be written
    """
    settings = settings or default_settings
    source = Path(source)

    try:
        info = build_entry_info(source)
        with zipfile.ZipFile(destination, "w", compression=zipfile.ZIP_STORED, allowZip64=False) as zipf:
            with open(source, "rb") as src, zipf.open(info, "w") as dest:
                shutil.copyfileobj(src, dest, settings.copy_buffer_size)
    except (OSError, zipfile.LargeZipFile) as e:
        raise PackageIOError(f"Failed to frame '{source}' into '{destination}': {e}") from e

    logger.debug(f"Framed {source.name} ({info.file_size} bytes) into {destination}")
    return info
