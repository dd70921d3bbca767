"""
Reporters receive packaging outcomes from the folder walker.

The walker never prints; it hands each result to a reporter. The CLI uses
ConsoleReporter, library callers get LoggingReporter by default and tests
can use CollectingReporter.
"""

import logging
from pathlib import Path
from typing import List, Optional, Protocol

from rich.console import Console
from rich.markup import escape

from rawpack.packager.schemas import PackageResult, PackageStatus, WalkSummary


class Reporter(Protocol):
    """Interface for observing a folder walk."""

    def folder_started(self, folder: Path) -> None:
        ...

    def file_finished(self, result: PackageResult) -> None:
        ...

    def walk_finished(self, summary: WalkSummary) -> None:
        ...


class LoggingReporter:
    """Reports outcomes through the standard logging module."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("rawpack.walker")

    def folder_started(self, folder: Path) -> None:
        self.logger.info(f"Processing folder: {folder}")

    def file_finished(self, result: PackageResult) -> None:
        name = result.source.name
        if result.status == PackageStatus.CREATED:
            self.logger.info(f"{name}...Created {result.target}")
        elif result.status == PackageStatus.EXISTS:
            self.logger.info(f"{name}...Package already exists. {result.target}")
        else:
            self.logger.warning(f"{name}...Failed. {result.error}")

    def walk_finished(self, summary: WalkSummary) -> None:
        self.logger.info(
            f"Done: {summary.created} created, {summary.skipped} already existed, "
            f"{summary.failed} failed in {summary.folders} folder(s)"
        )


class ConsoleReporter:
    """Prints one line per file to a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def folder_started(self, folder: Path) -> None:
        self.console.print(f"[bold]Processing folder:[/bold] {escape(str(folder))}")

    def file_finished(self, result: PackageResult) -> None:
        name = escape(result.source.name)
        target = escape(str(result.target))
        if result.status == PackageStatus.CREATED:
            self.console.print(f"{name}...[green]Created[/green] {target}")
        elif result.status == PackageStatus.EXISTS:
            self.console.print(f"{name}...[yellow]Package already exists.[/yellow] {target}")
        else:
            self.console.print(f"{name}...[bold red]Failed.[/bold red] {escape(result.error or '')}")

    def walk_finished(self, summary: WalkSummary) -> None:
        self.console.print(
            f"\n[bold]Created:[/bold] {summary.created}  "
            f"[bold]Already existed:[/bold] {summary.skipped}  "
            f"[bold]Failed:[/bold] {summary.failed}"
        )


class CollectingReporter:
    """Keeps every event in memory."""

    def __init__(self):
        self.folders: List[Path] = []
        self.results: List[PackageResult] = []
        self.summary: Optional[WalkSummary] = None

    def folder_started(self, folder: Path) -> None:
        self.folders.append(folder)

    def file_finished(self, result: PackageResult) -> None:
        self.results.append(result)

    def walk_finished(self, summary: WalkSummary) -> None:
        self.summary = summary
