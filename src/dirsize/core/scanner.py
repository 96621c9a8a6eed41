"""Concurrent recursive directory scanner.

The scanner walks a directory tree, fanning out one asyncio task per
subdirectory. Blocking filesystem reads run in worker threads and are
admitted through a single gate shared by the whole scan, capping the number
of reads in flight at ``max_concurrency`` regardless of tree depth.

Sizes are aggregated bottom-up: a directory's size is the sum of its
immediate files plus the sizes of its kept children. The caller's filter is
applied to each fully aggregated node; a rejected node is dropped together
with its subtree unless ``propagate_matches`` is enabled, in which case its
kept descendants are attached to the nearest kept ancestor instead.

Failures reading the root are fatal and propagate to the caller. Failures
below the root drop the affected subtree, are logged at DEBUG level and are
recorded in the scan report.
"""

from __future__ import annotations

import asyncio
import os
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from dirsize.config.models import DEFAULT_MAX_CONCURRENCY, ScanSettings
from dirsize.core.errors import (
    ScanCancelledError,
    ScanError,
    ScanTimeoutError,
    classify_os_error,
)
from dirsize.core.filesystem import AdmissionGate, BoundedFanOut, OsDirectoryReader
from dirsize.core.filters import accept_all
from dirsize.types.aliases import DirectoryFilter
from dirsize.types.models import (
    DirectoryEntry,
    FileEntry,
    RawEntry,
    ScanOutcome,
    ScanReport,
)
from dirsize.types.protocols import DirectoryReader, ScanLogger
from dirsize.utils.logging import get_logger, scan_id_context

__all__ = [
    "DirectoryScanner",
    "ScanCancellation",
    "scan_directories",
]

# Every other ScanError below the root drops the subtree instead of aborting
_FATAL_ERRORS: Final[tuple[type[ScanError], ...]] = (
    ScanCancelledError,
    ScanTimeoutError,
)


class ScanCancellation:
    """Cooperative cancellation token for a running scan.

    Safe to set from any thread. The scanner checks it before every
    directory read and raises ``ScanCancelledError`` once it is set.
    """

    def __init__(self) -> None:
        self._event: threading.Event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation of the scan."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._event.is_set()


@dataclass(slots=True, frozen=True)
class _Branch:
    """Result of scanning one subdirectory, as seen by its parent.

    ``node`` is None when the filter rejected the directory; ``hoisted`` then
    carries its kept descendants when matches propagate.
    """

    node: DirectoryEntry | None
    total_size: int
    hoisted: tuple[DirectoryEntry, ...] = ()


class _ScanRun:
    """State of a single top-level scan, shared by all of its tasks.

    All mutation happens on the event loop thread, so the report lists need
    no locking.
    """

    def __init__(
        self,
        *,
        reader: DirectoryReader,
        fan_out: BoundedFanOut,
        entry_filter: DirectoryFilter,
        propagate_matches: bool,
        logger: ScanLogger,
        cancellation: ScanCancellation | None,
    ) -> None:
        self.reader: DirectoryReader = reader
        self.fan_out: BoundedFanOut = fan_out
        self.entry_filter: DirectoryFilter = entry_filter
        self.propagate_matches: bool = propagate_matches
        self.logger: ScanLogger = logger
        self.cancellation: ScanCancellation | None = cancellation
        self.dropped_directories: list[str] = []
        self.unreadable_files: list[str] = []

    def report(self) -> ScanReport:
        return ScanReport(
            dropped_directories=tuple(self.dropped_directories),
            unreadable_files=tuple(self.unreadable_files),
        )

    async def scan_directory(self, path: str) -> _Branch | None:
        """Scan ``path`` and everything below it.

        Returns None when the filter rejected the directory and matches do
        not propagate. When they do, a rejected directory yields a branch
        with no node whose ``hoisted`` tuple may be empty.

        Raises:
            ScanError: If ``path`` cannot be listed; a raw ``OSError`` from
                the reader is classified first
        """
        if self.cancellation is not None and self.cancellation.is_cancelled:
            raise ScanCancelledError(f"Scan cancelled before reading {path}", path=path)

        try:
            entries = await self.fan_out.call_blocking(self.reader.read_entries, path)
        except OSError as exc:
            raise classify_os_error(exc, path) from exc

        files, subdir_paths = self._partition(entries)
        branches = await self.fan_out.run(subdir_paths, self._scan_child)

        children: list[DirectoryEntry] = []
        for branch in branches:
            if branch.node is not None:
                children.append(branch.node)
            else:
                children.extend(branch.hoisted)

        # Hoisting mode counts every readable byte; otherwise kept children only
        size: int | None = None
        if self.propagate_matches:
            size = sum(f.size for f in files) + sum(b.total_size for b in branches)

        candidate = DirectoryEntry.build(
            name=os.path.basename(path) or path,
            full_path=path,
            files=files,
            children=children,
            size=size,
        )

        if self.entry_filter(candidate):
            return _Branch(node=candidate, total_size=candidate.size)

        self.logger.debug(
            "Directory rejected by filter",
            extra={"path": path, "size": candidate.size},
        )
        if self.propagate_matches:
            return _Branch(node=None, total_size=candidate.size, hoisted=candidate.children)
        return None

    async def _scan_child(self, path: str) -> _Branch | None:
        try:
            return await self.scan_directory(path)
        except _FATAL_ERRORS:
            raise
        except ScanError as exc:
            self.dropped_directories.append(path)
            self.logger.debug(
                "Skipping unreadable directory",
                extra={"path": path, "error": str(exc), "error_type": type(exc).__name__},
            )
            return None

    def _partition(self, entries: Sequence[RawEntry]) -> tuple[list[FileEntry], list[str]]:
        files: list[FileEntry] = []
        subdir_paths: list[str] = []
        for entry in entries:
            if entry.is_dir:
                subdir_paths.append(os.path.abspath(entry.path))
                continue
            if entry.error is not None:
                self.unreadable_files.append(entry.path)
            files.append(_to_file_entry(entry, self.logger))
        return files, subdir_paths


def _to_file_entry(entry: RawEntry, logger: ScanLogger) -> FileEntry:
    if entry.error is not None:
        logger.warning(
            "Cannot read file metadata, recording size 0",
            extra={"path": entry.path, "error": entry.error},
        )
    return FileEntry(
        name=entry.name,
        full_path=os.path.abspath(entry.path),
        size=entry.size if entry.error is None else 0,
    )


class DirectoryScanner:
    """Scan directory trees and aggregate their sizes.

    Collaborators are injected at construction and shared read-only by every
    task of every scan:

    - ``reader``: lists immediate directory entries (default: ``os.scandir``)
    - ``logger_obj``: four-level diagnostic logger (default: module logger)

    Example:
        >>> scanner = DirectoryScanner(max_concurrency=4)
        >>> root = scanner.scan_sync("/var/log", size_filter(100 * 1024**2))
        >>> [entry.full_path for entry in reorder(root)]
    """

    def __init__(
        self,
        reader: DirectoryReader | None = None,
        *,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        propagate_matches: bool = False,
        timeout_seconds: float | None = None,
        logger_obj: ScanLogger | None = None,
    ) -> None:
        """Initialize the scanner.

        Args:
            reader: Directory reader capability
            max_concurrency: Maximum number of concurrent filesystem reads
            propagate_matches: Keep kept descendants of rejected directories
            timeout_seconds: Deadline for a whole scan (None for no deadline)
            logger_obj: Logger for diagnostics

        Raises:
            ValueError: If max_concurrency or timeout_seconds is not positive
        """
        if max_concurrency < 1:
            msg = "max_concurrency must be at least 1"
            raise ValueError(msg)
        if timeout_seconds is not None and timeout_seconds <= 0:
            msg = "timeout_seconds must be greater than zero"
            raise ValueError(msg)

        self._reader: DirectoryReader = reader or OsDirectoryReader()
        self._max_concurrency: int = max_concurrency
        self._propagate_matches: bool = propagate_matches
        self._timeout_seconds: float | None = timeout_seconds
        self._logger: ScanLogger = logger_obj or get_logger(__name__)

    @classmethod
    def from_settings(
        cls,
        settings: ScanSettings,
        *,
        reader: DirectoryReader | None = None,
        logger_obj: ScanLogger | None = None,
    ) -> DirectoryScanner:
        """Create a scanner from validated scan settings."""
        return cls(
            reader,
            max_concurrency=settings.max_concurrency,
            propagate_matches=settings.propagate_matches,
            timeout_seconds=settings.timeout_seconds,
            logger_obj=logger_obj,
        )

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    async def scan(
        self,
        path: str | os.PathLike[str],
        entry_filter: DirectoryFilter = accept_all,
        *,
        cancellation: ScanCancellation | None = None,
    ) -> DirectoryEntry | None:
        """Scan a directory tree.

        Args:
            path: Root directory
            entry_filter: Predicate applied to every aggregated directory
            cancellation: Optional cancellation token

        Returns:
            The root entry with its kept subtree, or None when the filter
            rejected the root itself

        Raises:
            DirectoryNotFoundError: If the root does not exist
            DirectoryPermissionError: If the root cannot be listed
            DirectoryReadError: For any other I/O failure at the root
            ScanTimeoutError: If the scan exceeds its deadline
            ScanCancelledError: If the scan was cancelled
        """
        outcome = await self.scan_with_report(path, entry_filter, cancellation=cancellation)
        return outcome.root

    async def scan_with_report(
        self,
        path: str | os.PathLike[str],
        entry_filter: DirectoryFilter = accept_all,
        *,
        cancellation: ScanCancellation | None = None,
    ) -> ScanOutcome:
        """Scan a directory tree and report the recoverable events.

        Same contract as :meth:`scan`, but also returns which subdirectories
        were dropped and which files were recorded with an unknown size.
        """
        root_path = os.path.abspath(os.fspath(path))
        gate = AdmissionGate(self._max_concurrency)
        run = _ScanRun(
            reader=self._reader,
            fan_out=BoundedFanOut(gate),
            entry_filter=entry_filter,
            propagate_matches=self._propagate_matches,
            logger=self._logger,
            cancellation=cancellation,
        )

        with scan_id_context():
            self._logger.info(
                "Starting directory scan",
                extra={"path": root_path, "max_concurrency": self._max_concurrency},
            )
            start = time.perf_counter()

            try:
                async with asyncio.timeout(self._timeout_seconds):
                    branch = await run.scan_directory(root_path)
            except TimeoutError as exc:
                if self._timeout_seconds is None:
                    raise
                self._logger.error(
                    "Directory scan timed out",
                    extra={"path": root_path, "timeout_seconds": self._timeout_seconds},
                )
                raise ScanTimeoutError(root_path, self._timeout_seconds) from exc

            root = branch.node if branch is not None else None
            hoisted = branch.hoisted if branch is not None else ()
            report = run.report()
            self._logger.info(
                "Directory scan finished",
                extra={
                    "path": root_path,
                    "size": root.size if root is not None else 0,
                    "dropped_directories": len(report.dropped_directories),
                    "unreadable_files": len(report.unreadable_files),
                    "peak_concurrency": gate.peak,
                    "elapsed_ms": round((time.perf_counter() - start) * 1000.0, 1),
                },
            )

        return ScanOutcome(root=root, report=report, hoisted=hoisted)

    def scan_sync(
        self,
        path: str | os.PathLike[str],
        entry_filter: DirectoryFilter = accept_all,
        *,
        cancellation: ScanCancellation | None = None,
    ) -> DirectoryEntry | None:
        """Blocking wrapper around :meth:`scan` for callers without an event loop."""
        return asyncio.run(self.scan(path, entry_filter, cancellation=cancellation))

    def scan_with_report_sync(
        self,
        path: str | os.PathLike[str],
        entry_filter: DirectoryFilter = accept_all,
        *,
        cancellation: ScanCancellation | None = None,
    ) -> ScanOutcome:
        """Blocking wrapper around :meth:`scan_with_report`."""
        return asyncio.run(self.scan_with_report(path, entry_filter, cancellation=cancellation))

    def list_files_sync(self, path: str | os.PathLike[str]) -> list[FileEntry]:
        """List the immediate files of a single directory.

        No recursion and no concurrency. Subdirectories are ignored.

        Raises:
            DirectoryNotFoundError: If the directory does not exist
            DirectoryPermissionError: If the directory cannot be listed
            DirectoryReadError: For any other I/O failure
        """
        dir_path = os.path.abspath(os.fspath(path))
        entries = self._reader.read_entries(dir_path)
        return [_to_file_entry(entry, self._logger) for entry in entries if not entry.is_dir]

    async def list_files(self, path: str | os.PathLike[str]) -> list[FileEntry]:
        """Async variant of :meth:`list_files_sync`, run in a worker thread."""
        return await asyncio.to_thread(self.list_files_sync, path)


def scan_directories(
    path: str | os.PathLike[str],
    entry_filter: DirectoryFilter = accept_all,
    *,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    logger_obj: ScanLogger | None = None,
) -> DirectoryEntry | None:
    """Scan ``path`` with a default scanner and return the filtered tree."""
    scanner = DirectoryScanner(max_concurrency=max_concurrency, logger_obj=logger_obj)
    return scanner.scan_sync(path, entry_filter)
