"""
Top-level CLI for rawpack.

    rawpack [pack] --path=<dir> [--filter=*.cr2] [--recursive=true] [--out=<dir>]
    rawpack inspect <package> [--verify <raw file>]
"""

import logging
import zipfile
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from typer.core import TyperGroup
from rich.console import Console
from rich.table import Table

from rawpack import __version__
from rawpack.archive import PackageAccessor
from rawpack.core.config import settings
from rawpack.core.exceptions import ArgumentError, PathNotFoundError, RawPackError
from rawpack.core.logging_config import configure_logging
from rawpack.packager import ConsoleReporter, FolderWalker, Packager

logger = logging.getLogger(__name__)
console = Console()


class DefaultPackGroup(TyperGroup):
    """Runs `pack` when the command line does not start with a command name."""

    default_command = "pack"

    def parse_args(self, ctx, args):
        own_options = {opt for param in self.get_params(ctx) for opt in param.opts}
        if not args or (args[0] not in self.commands and args[0] not in own_options):
            args = [self.default_command] + list(args)
        return super().parse_args(ctx, args)


main_app = typer.Typer(
    cls=DefaultPackGroup,
    help="rawpack CLI: package RAW files as JPEGs carrying the original"
)

TRUE_VALUES = {"true", "yes", "y", "1", "on"}
FALSE_VALUES = {"false", "no", "n", "0", "off"}


class PackMode(str, Enum):
    """Packaging modes accepted on the command line."""
    PACK = "pack"
    UNPACK = "unpack"


def parse_mode(value: str) -> PackMode:
    try:
        return PackMode(value.strip().lower())
    except ValueError:
        raise ArgumentError(f"Unknown mode '{value}', expected pack or unpack.")


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ArgumentError(f"Invalid value '{value}' for --recursive, expected true or false.")


def resolve_source_path(path: Optional[str], extra: Optional[List[str]]) -> Path:
    """
    Work out the folder to package.

    An explicit --path wins. Otherwise the first unparsed token naming an
    existing directory is used.
    """
    if not path:
        if not extra:
            raise ArgumentError("You must specify a path.")
        path = next((token for token in extra if Path(token).is_dir()), "")

    if not path or not Path(path).is_dir():
        raise PathNotFoundError(path or "")
    return Path(path)


def write_error_message(message: str) -> None:
    console.print(f"rawpack: {message}", markup=False, highlight=False)
    console.print("Try 'rawpack pack --help' for more information.", markup=False, highlight=False)


@main_app.command("pack")
def pack(
    extra: Optional[List[str]] = typer.Argument(None, help="Folder to package when --path is not given"),
    mode: str = typer.Option("pack", "--mode", help="The packaging mode (pack/unpack)."),
    path: Optional[str] = typer.Option(None, "--path", help="The folder containing RAW files."),
    filter: str = typer.Option("", "--filter", help="The files to package, e.g. *.cr2."),
    recursive: str = typer.Option("true", "--recursive", help="Whether to include all subfolders (true/false)."),
    out: Optional[str] = typer.Option(None, "--out", help="The output folder; defaults to the source folder."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """Package every matching RAW file in a folder."""
    configure_logging("DEBUG" if verbose else settings.log_level)

    try:
        pack_mode = parse_mode(mode)
        is_recursive = parse_bool(recursive)
        source = resolve_source_path(path, extra)
    except ArgumentError as e:
        write_error_message(str(e))
        raise typer.Exit(1)
    except PathNotFoundError:
        write_error_message("You must specify an existing path.")
        raise typer.Exit(1)

    if pack_mode != PackMode.PACK:
        write_error_message(f"Mode '{pack_mode.value}' is not implemented.")
        raise typer.Exit(1)

    output = Path(out) if out else source
    try:
        output.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        write_error_message(f"Cannot create output folder '{output}': {e.strerror or e}")
        raise typer.Exit(1)

    walker = FolderWalker(Packager(settings), ConsoleReporter(console), settings)
    try:
        walker.package_folder(source, filter, is_recursive, output)
    except RawPackError as e:
        write_error_message(str(e))
        raise typer.Exit(1)


@main_app.command("inspect")
def inspect(
    package_path: Path = typer.Argument(..., help="Path to the packaged file"),
    verify: Optional[Path] = typer.Option(None, "--verify", help="Original RAW file to compare against"),
):
    """Display the thumbnail and archive contents of a packaged file."""
    try:
        accessor = PackageAccessor(package_path)
        stats = accessor.get_package_stats()
        entries = accessor.get_entries()
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"[bold]Package:[/bold] {package_path}")
    console.print(f"[bold]Size:[/bold] {stats['package_size']} bytes")
    console.print(f"[bold]Thumbnail:[/bold] {stats['thumbnail_size']} bytes")
    console.print(f"[bold]Archive:[/bold] {stats['archive_size']} bytes")

    table = Table(title="Archive entries")
    table.add_column("Name", style="cyan")
    table.add_column("Size", style="magenta")
    table.add_column("Stored", style="green")
    table.add_column("Modified", style="yellow")
    for entry in entries:
        table.add_row(
            entry['name'],
            str(entry['size']),
            "yes" if entry['compress_type'] == zipfile.ZIP_STORED else "no",
            "%04d-%02d-%02d %02d:%02d:%02d" % tuple(entry['date_time'])
        )
    console.print(table)

    if verify is not None:
        try:
            checks = accessor.verify_against(verify)
        except OSError as e:
            console.print(f"[bold red]Error:[/bold red] {str(e)}")
            raise typer.Exit(1)
        for name, passed in checks.items():
            mark = "[green]ok[/green]" if passed else "[bold red]mismatch[/bold red]"
            console.print(f"{name}: {mark}")
        if not checks['ok']:
            raise typer.Exit(1)


@main_app.command("version")
def version():
    """Show the rawpack version."""
    console.print(f"rawpack {__version__}")


def main():
    main_app()


if __name__ == "__main__":
    main()
