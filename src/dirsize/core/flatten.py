"""Flattened, size-ordered views over a scanned tree."""

from __future__ import annotations

from collections.abc import Iterable

from dirsize.types.models import DirectoryEntry, FileEntry

__all__ = ["flatten", "reorder", "sort_by_size", "sort_files_by_size"]


def flatten(root: DirectoryEntry | None) -> list[DirectoryEntry]:
    """Linearize a tree in pre-order: a node, then each child's subtree.

    Args:
        root: Root of the tree, or None when the root was filtered out

    Returns:
        Every kept directory node exactly once
    """
    if root is None:
        return []
    return list(root.iter_tree())


def sort_by_size(entries: Iterable[DirectoryEntry]) -> list[DirectoryEntry]:
    """Sort directories by size, largest first.

    The sort is stable, so entries of equal size keep their relative order.
    """
    return sorted(entries, key=lambda entry: entry.size, reverse=True)


def reorder(root: DirectoryEntry | None) -> list[DirectoryEntry]:
    """Flatten a tree and order it by size for display."""
    return sort_by_size(flatten(root))


def sort_files_by_size(files: Iterable[FileEntry]) -> list[FileEntry]:
    """Sort files by size, largest first, keeping listing order for ties."""
    return sorted(files, key=lambda file: file.size, reverse=True)
