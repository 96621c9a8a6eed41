"""Scan identifier tracking for log records.

The identifier lives in a ContextVar, so it is inherited by every asyncio
task created during a scan and by worker threads started through
``asyncio.to_thread``.
"""

from __future__ import annotations

import contextvars
import logging
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from typing import override

__all__ = [
    "ScanIdFilter",
    "clear_scan_id",
    "get_scan_id",
    "new_scan_id",
    "scan_id_context",
    "scan_id_var",
    "set_scan_id",
]

scan_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_id",
    default=None,
)


class ScanIdFilter(logging.Filter):
    """Logging filter that adds the current scan ID to log records."""

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Attach ``scan_id`` to the record ("-" outside of a scan).

        Args:
            record: Log record to enhance

        Returns:
            True to allow the record to be logged
        """
        scan_id = scan_id_var.get()
        record.scan_id = scan_id if scan_id is not None else "-"
        return True


def new_scan_id() -> str:
    """Generate a short random scan identifier."""
    return uuid.uuid4().hex[:12]


def set_scan_id(scan_id: str) -> None:
    """Set the scan ID for the current context."""
    _ = scan_id_var.set(scan_id)


def get_scan_id() -> str | None:
    """Get the scan ID of the current context, if any."""
    return scan_id_var.get()


def clear_scan_id() -> None:
    """Clear the scan ID from the current context."""
    _ = scan_id_var.set(None)


@contextmanager
def scan_id_context(scan_id: str | None = None) -> Generator[str, None, None]:
    """Temporarily set a scan ID, restoring the previous one on exit.

    Args:
        scan_id: Identifier to use; a new one is generated when omitted

    Yields:
        The active scan ID
    """
    active = scan_id if scan_id is not None else new_scan_id()
    token = scan_id_var.set(active)
    try:
        yield active
    finally:
        scan_id_var.reset(token)
