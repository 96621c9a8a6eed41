"""dirsize - Find the directories that take up the most disk space.

This package scans a directory tree concurrently, aggregates directory sizes
bottom-up, filters the tree by size and presents it as a flat list ordered
from largest to smallest.
"""

from dirsize.core.filters import size_filter
from dirsize.core.flatten import flatten, reorder
from dirsize.core.scanner import DirectoryScanner, scan_directories
from dirsize.types.models import DirectoryEntry, FileEntry
from dirsize.utils.formatting import format_size

__all__ = [
    "DirectoryEntry",
    "DirectoryScanner",
    "FileEntry",
    "flatten",
    "format_size",
    "reorder",
    "scan_directories",
    "size_filter",
]
