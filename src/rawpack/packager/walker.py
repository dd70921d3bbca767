"""
Folder walker: packages every matching file in a directory tree.

Files in a folder are processed before its subfolders, depth first. Each
subfolder is mirrored by name under the output folder. A file whose package
already exists is skipped, so re-running a walk only packages what is new.
"""

import fnmatch
import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from rawpack.core.config import Settings, settings as default_settings
from rawpack.core.exceptions import PathNotFoundError
from rawpack.packager.packager import Packager
from rawpack.packager.reporter import LoggingReporter, Reporter
from rawpack.packager.schemas import PackageResult, WalkSummary

logger = logging.getLogger(__name__)


class FolderWalker:
    """Applies a Packager to every matching file in a folder."""

    def __init__(
        self,
        packager: Optional[Packager] = None,
        reporter: Optional[Reporter] = None,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or (packager.settings if packager else default_settings)
        self.packager = packager or Packager(self.settings)
        self.reporter = reporter or LoggingReporter()

    def package_folder(
        self,
        source_folder: Union[str, Path],
        filter: str = "",
        recursive: bool = True,
        output_folder: Optional[Union[str, Path]] = None
    ) -> WalkSummary:
        """
        Package the files of a folder, optionally including all subfolders.

        Args:
            source_folder: Folder to scan
            filter: Glob pattern for file names; empty matches every file
            recursive: Whether to descend into subfolders
            output_folder: Root of the output tree; defaults to source_folder

        Returns:
            WalkSummary with one result per matched file

        Raises:
            PathNotFoundError: If source_folder is not an existing directory,
                or output_folder cannot be created
        """
        source_folder = Path(source_folder)
        if not source_folder.is_dir():
            raise PathNotFoundError(source_folder)

        output_folder = Path(output_folder) if output_folder else source_folder
        try:
            output_folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PathNotFoundError(output_folder, str(e)) from e

        summary = WalkSummary()
        self._walk(source_folder, filter, recursive, output_folder, summary, output_folder.resolve())
        self.reporter.walk_finished(summary)
        return summary

    def _walk(
        self,
        source_folder: Path,
        filter: str,
        recursive: bool,
        output_folder: Path,
        summary: WalkSummary,
        output_root: Path
    ) -> None:
        self.reporter.folder_started(source_folder)
        summary.folders += 1

        try:
            files, subfolders = self._list_folder(source_folder)
        except OSError as e:
            # An unreadable folder counts as one failure; its siblings are still walked
            logger.warning(f"Cannot list folder {source_folder}: {e}")
            result = PackageResult.failed(source_folder, output_folder, e)
            summary.add(result)
            self.reporter.file_finished(result)
            return

        for source_file in self._matching_files(files, filter, source_folder, output_folder):
            result = self._package_one(source_file, output_folder)
            summary.add(result)
            self.reporter.file_finished(result)

        if not recursive:
            return

        for child in subfolders:
            # An output tree nested inside the source must not be walked as input
            if child.resolve() == output_root:
                logger.debug(f"Skipping output folder {child}")
                continue
            self._walk(child, filter, True, output_folder / child.name, summary, output_root)

    def _list_folder(self, folder: Path) -> Tuple[List[Path], List[Path]]:
        files, subfolders = [], []
        for entry in sorted(folder.iterdir()):
            if entry.is_dir():
                subfolders.append(entry)
            elif entry.is_file():
                files.append(entry)
        return files, subfolders

    def _matching_files(
        self,
        files: List[Path],
        filter: str,
        folder: Path,
        output_folder: Path
    ) -> List[Path]:
        if filter:
            # Camera file names are often upper case, match like a case-insensitive filesystem
            pattern = filter.lower()
            files = [p for p in files if fnmatch.fnmatchcase(p.name.lower(), pattern)]
        if folder.resolve() == output_folder.resolve():
            packages = [p for p in files if self._is_package_of_sibling(p)]
            for package in packages:
                logger.debug(f"Skipping {package.name}, it is the package of a file in the same folder")
            files = [p for p in files if p not in packages]
        return files

    def _is_package_of_sibling(self, path: Path) -> bool:
        suffix = self.settings.package_suffix
        if not suffix or not path.name.endswith(suffix):
            return False
        return path.with_name(path.name[:-len(suffix)]).is_file()

    def _package_one(self, source_file: Path, output_folder: Path) -> PackageResult:
        target = output_folder / (source_file.name + self.settings.package_suffix)
        if target.exists():
            return PackageResult.exists(source_file, target)
        return self.packager.try_package_file(source_file.absolute(), target)
