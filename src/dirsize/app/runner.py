"""Application runner for the dirsize commands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from dirsize.config.models import AppConfig
from dirsize.core.filters import size_filter
from dirsize.core.flatten import reorder, sort_files_by_size
from dirsize.core.scanner import DirectoryScanner
from dirsize.types.models import DirectoryEntry, FileEntry, ScanOutcome
from dirsize.types.protocols import DirectoryReader
from dirsize.utils.formatting import format_size

logger = logging.getLogger(__name__)

# Printed after every directory block
SEPARATOR = "-----"


class ScanRunner:
    """Run the scanner for a CLI command and render its results."""

    def __init__(
        self,
        config: AppConfig,
        *,
        limit: int | None = None,
        reader: DirectoryReader | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            config: Validated application configuration
            limit: Maximum number of directories to print (None for all)
            reader: Directory reader override, mainly for tests
        """
        self.config: AppConfig = config
        self.limit: int | None = limit
        self.scanner: DirectoryScanner = DirectoryScanner.from_settings(
            config.scan,
            reader=reader,
        )

    def folder_list(self, directory: Path) -> ScanOutcome:
        """Scan ``directory`` and print every directory above the threshold.

        Directories are printed largest first, followed by a summary line.

        Raises:
            ScanError: If the root directory cannot be scanned
        """
        settings = self.config.scan
        logger.debug(
            "Listing folders",
            extra={
                "directory": str(directory),
                "min_size": settings.min_size,
                "size_unit": settings.size_unit.value,
            },
        )

        outcome = self.scanner.scan_with_report_sync(
            directory,
            size_filter(settings.threshold_bytes),
        )

        entries = reorder(outcome.root)
        shown = entries if self.limit is None else entries[: self.limit]
        for entry in shown:
            render_directory(entry)

        threshold = f"{settings.min_size:g} {settings.size_unit.value}"
        click.echo(f"{len(entries)} directories larger than {threshold}")
        if outcome.report.dropped_directories:
            click.echo(
                f"{len(outcome.report.dropped_directories)} directories could not be read",
                err=True,
            )
        return outcome

    def file_list(self, directory: Path) -> list[FileEntry]:
        """Print the immediate files of ``directory``, largest first.

        Raises:
            ScanError: If the directory cannot be listed
        """
        files = sort_files_by_size(self.scanner.list_files_sync(directory))
        shown = files if self.limit is None else files[: self.limit]
        for file in shown:
            click.echo(f"{format_size(file.size):>12}  {file.full_path}")
        return files


def render_directory(entry: DirectoryEntry) -> None:
    """Print one directory block."""
    click.echo(f"Name: {entry.name}")
    click.echo(f"Path: {entry.full_path}")
    click.echo(f"Size: {format_size(entry.size)}")
    click.echo(SEPARATOR)
