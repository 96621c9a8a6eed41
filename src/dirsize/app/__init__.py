"""Application module for the dirsize command-line tool."""

from __future__ import annotations

from dirsize.app.cli import cli, main
from dirsize.app.runner import ScanRunner

__all__ = [
    "cli",
    "main",
    "ScanRunner",
]
