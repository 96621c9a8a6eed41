"""Filesystem access and bounded scheduling for the directory scanner."""

from __future__ import annotations

from .reader import OsDirectoryReader
from .scheduler import DEFAULT_MAX_CONCURRENCY, AdmissionGate, BoundedFanOut

__all__ = [
    "AdmissionGate",
    "BoundedFanOut",
    "DEFAULT_MAX_CONCURRENCY",
    "OsDirectoryReader",
]
