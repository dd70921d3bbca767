"""
Packager: turns one RAW file into a thumbnail + stored archive package.

The package is a JPEG thumbnail followed by a single-entry ZIP that holds the
original file verbatim. Image viewers read the JPEG from the start of the
file; ZIP readers find the archive from the end.
"""

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from rawpack.archive.frame import write_archive_frame
from rawpack.core.config import Settings, settings as default_settings
from rawpack.core.exceptions import PackageIOError
from rawpack.packager.schemas import PackageResult
from rawpack.thumbnail.thumbnailer import render_thumbnail

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def combine_files(first: PathLike, second: PathLike, chunk_size: int = 32 * 1024) -> None:
    """
    Append the bytes of `second` to the end of `first`.

    This is a raw byte copy; neither file is validated.
    """
    try:
        with open(first, "ab") as original, open(second, "rb") as extra:
            shutil.copyfileobj(extra, original, chunk_size)
    except OSError as e:
        raise PackageIOError(f"Failed to append '{second}' to '{first}': {e}") from e


@contextmanager
def temporary_file(suffix: str = "", temp_dir: Optional[str] = None) -> Iterator[Path]:
    """
    Yield the path of a new empty temporary file and delete it on exit.

    The file may already have been moved away by the caller; that is fine.
    """
    try:
        fd, name = tempfile.mkstemp(suffix=suffix, prefix="rawpack-", dir=temp_dir)
    except OSError as e:
        raise PackageIOError(f"Failed to create temporary file: {e}") from e
    os.close(fd)
    path = Path(name)
    try:
        yield path
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            pass


class Packager:
    """Creates packages from RAW files."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    def default_target(self, source_file: PathLike) -> Path:
        """Return `<source dir>/<source name><suffix>`."""
        source_file = Path(source_file)
        return source_file.parent / (source_file.name + self.settings.package_suffix)

    def package_file(self, source_file: PathLike, target_file: Optional[PathLike] = None) -> Path:
        """
        Create a package from a RAW file.

        Args:
            source_file: Path to the input file
            target_file: Optional path to the packaged file; defaults to the
                source path with the package suffix appended

        Returns:
            Path where the packaged file now resides

        Raises:
            DecodeError: If the source can't be decoded as an image
            PackageIOError: If reading, writing or moving fails
        """
        source = Path(source_file).absolute()
        if not source.is_file():
            raise PackageIOError(f"Source file '{source}' does not exist")

        target = Path(target_file) if target_file else self.default_target(source)
        temp_dir = self.settings.temp_dir
        logger.debug(f"{source.name}: start")

        with temporary_file(".jpg", temp_dir) as jpg_file, temporary_file(".zip", temp_dir) as zip_file:
            # Create a temporary jpg from the RAW file
            render_thumbnail(source, jpg_file, self.settings)
            logger.debug(f"{source.name}: thumbnail created")

            # Frame the RAW file in a stored zip
            write_archive_frame(source, zip_file, self.settings)
            logger.debug(f"{source.name}: archive created")

            # Bind the jpg and zip
            combine_files(jpg_file, zip_file, self.settings.copy_buffer_size)
            logger.debug(f"{source.name}: combined")

            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.move(str(jpg_file), str(target))
            except OSError as e:
                raise PackageIOError(f"Failed to move package to '{target}': {e}") from e
            logger.debug(f"{source.name}: moved to {target}")

        return target

    def try_package_file(
        self,
        source_file: PathLike,
        target_file: Optional[PathLike] = None
    ) -> PackageResult:
        """
        Package a file and report the outcome as a result instead of raising.
        """
        source = Path(source_file)
        target = Path(target_file) if target_file else self.default_target(source)
        try:
            created = self.package_file(source, target)
        except Exception as e:
            logger.debug(f"Packaging {source} failed", exc_info=True)
            return PackageResult.failed(source, target, e)
        return PackageResult.created(source, created)
