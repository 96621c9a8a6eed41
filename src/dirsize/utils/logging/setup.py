"""Logging configuration for the dirsize application.

Provides console logging with structured output and scan ID tracking.
Library code only ever calls ``logging.getLogger(__name__)``; handlers are
installed by the CLI through :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Final, TextIO

from .scan_context import ScanIdFilter, get_scan_id
from .structured_formatter import LogFormat, StructuredFormatter

__all__ = [
    "DEFAULT_LOG_FORMAT",
    "configure_logging",
    "get_logger",
    "log_with_context",
]

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(scan_id)s] - %(message)s"

# Third-party loggers that are noisy at DEBUG level
_QUIET_LOGGERS: Final[tuple[str, ...]] = ("asyncio",)


def configure_logging(
    *,
    log_level: str = "WARNING",
    log_format: str = "text",
    stream: TextIO | None = None,
) -> None:
    """Configure root logging with scan ID tracking.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: "text" for the classic line format, "keyvalue" or
            "json" for structured output
        stream: Output stream (default: stderr, keeping stdout for results)

    Example:
        >>> configure_logging(log_level="DEBUG", log_format="json")
        >>> logging.getLogger("dirsize").debug("Scanning", extra={"path": "/tmp"})
    """
    root_logger = logging.getLogger()

    level = getattr(logging, log_level.upper(), logging.WARNING)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    if log_format == "text":
        handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
    else:
        handler.setFormatter(StructuredFormatter(LogFormat(log_format)))
    handler.addFilter(ScanIdFilter())
    root_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    *,
    extra: Mapping[str, object] | None = None,
) -> None:
    """Log a message with additional context fields.

    The scan ID of the current context is included when one is set, so the
    record carries it even when no ``ScanIdFilter`` is installed.

    Args:
        logger: Logger instance to use
        level: Logging level (e.g., logging.INFO)
        message: Log message
        extra: Additional context fields to include in log
    """
    context = dict(extra) if extra else {}

    scan_id = get_scan_id()
    if scan_id:
        context["scan_id"] = scan_id

    logger.log(level, message, extra=context)
