"""Type definitions and protocols for dirsize.

This package provides:
- Data models (immutable dataclasses)
- Protocol definitions (structural subtyping interfaces)
- Type aliases (PEP 695 modern syntax)
"""

from dirsize.types.aliases import DirectoryFilter, FanOutWork
from dirsize.types.models import (
    DirectoryEntry,
    FileEntry,
    RawEntry,
    ScanOutcome,
    ScanReport,
)
from dirsize.types.protocols import DirectoryReader, ScanLogger

__all__ = [
    # Type aliases
    "DirectoryFilter",
    "FanOutWork",
    # Data models
    "DirectoryEntry",
    "FileEntry",
    "RawEntry",
    "ScanOutcome",
    "ScanReport",
    # Protocols
    "DirectoryReader",
    "ScanLogger",
]
