"""Directory filter predicates.

A filter is evaluated once per directory node, after the node's own size and
all of its kept children are known.
"""

from __future__ import annotations

from dirsize.config.models import SizeUnit
from dirsize.types.aliases import DirectoryFilter
from dirsize.types.models import DirectoryEntry

__all__ = [
    "accept_all",
    "all_of",
    "any_of",
    "size_filter",
    "threshold_from_units",
]


def accept_all(entry: DirectoryEntry) -> bool:  # pyright: ignore[reportUnusedParameter]
    """Default filter: keep every directory."""
    return True


def size_filter(threshold_bytes: int) -> DirectoryFilter:
    """Build a filter keeping directories strictly larger than a threshold.

    Args:
        threshold_bytes: Size in bytes a directory must exceed

    Returns:
        Predicate over aggregated directory entries

    Raises:
        ValueError: If threshold_bytes is negative

    Examples:
        >>> keep = size_filter(1024)
        >>> keep(DirectoryEntry.build(name="a", full_path="/a"))
        False
    """
    if threshold_bytes < 0:
        msg = "threshold_bytes must be non-negative"
        raise ValueError(msg)

    def _exceeds_threshold(entry: DirectoryEntry) -> bool:
        return entry.size > threshold_bytes

    return _exceeds_threshold


def threshold_from_units(value: float, unit: SizeUnit) -> int:
    """Convert a size expressed in ``unit`` to whole bytes.

    Examples:
        >>> threshold_from_units(1.5, SizeUnit.KB)
        1536
    """
    if value < 0:
        msg = "value must be non-negative"
        raise ValueError(msg)
    return int(value * unit.bytes)


def all_of(*predicates: DirectoryFilter) -> DirectoryFilter:
    """Keep a directory only when every predicate keeps it."""

    def _all(entry: DirectoryEntry) -> bool:
        return all(predicate(entry) for predicate in predicates)

    return _all


def any_of(*predicates: DirectoryFilter) -> DirectoryFilter:
    """Keep a directory when at least one predicate keeps it."""

    def _any(entry: DirectoryEntry) -> bool:
        return any(predicate(entry) for predicate in predicates)

    return _any
