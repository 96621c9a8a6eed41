"""Core scanning logic: recursive scanner, filters and flattened views."""

from __future__ import annotations

from .errors import (
    DirectoryNotFoundError,
    DirectoryPermissionError,
    DirectoryReadError,
    ScanCancelledError,
    ScanError,
    ScanTimeoutError,
    classify_os_error,
)
from .filters import accept_all, all_of, any_of, size_filter, threshold_from_units
from .flatten import flatten, reorder, sort_by_size, sort_files_by_size
from .scanner import DirectoryScanner, ScanCancellation, scan_directories

__all__ = [
    # Scanner
    "DirectoryScanner",
    "ScanCancellation",
    "scan_directories",
    # Filters
    "accept_all",
    "all_of",
    "any_of",
    "size_filter",
    "threshold_from_units",
    # Views
    "flatten",
    "reorder",
    "sort_by_size",
    "sort_files_by_size",
    # Errors
    "DirectoryNotFoundError",
    "DirectoryPermissionError",
    "DirectoryReadError",
    "ScanCancelledError",
    "ScanError",
    "ScanTimeoutError",
    "classify_os_error",
]
