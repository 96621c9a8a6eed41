"""Logging utilities and structured logging setup."""

from __future__ import annotations

from .scan_context import (
    ScanIdFilter,
    clear_scan_id,
    get_scan_id,
    new_scan_id,
    scan_id_context,
    set_scan_id,
)
from .setup import (
    DEFAULT_LOG_FORMAT,
    configure_logging,
    get_logger,
    log_with_context,
)
from .structured_formatter import LogFormat, StructuredFormatter

__all__ = [
    "DEFAULT_LOG_FORMAT",
    "LogFormat",
    "ScanIdFilter",
    "StructuredFormatter",
    "clear_scan_id",
    "configure_logging",
    "get_logger",
    "get_scan_id",
    "log_with_context",
    "new_scan_id",
    "scan_id_context",
    "set_scan_id",
]
