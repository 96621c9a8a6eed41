"""Classified scan errors.

Errors raised while reading the root directory are fatal and reach the
caller. The same errors raised below the root are caught by the scanner,
logged, and the affected subtree is dropped.
"""

from __future__ import annotations

import errno

__all__ = [
    "DirectoryNotFoundError",
    "DirectoryPermissionError",
    "DirectoryReadError",
    "ScanCancelledError",
    "ScanError",
    "ScanTimeoutError",
    "classify_os_error",
]


class ScanError(Exception):
    """Base exception for all scan failures."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        context: dict[str, object] | None = None,
    ) -> None:
        """Initialize ScanError.

        Args:
            message: Error message
            path: Filesystem path the failure relates to
            context: Additional context information for debugging
        """
        full_context = dict(context or {})
        if path is not None:
            full_context["path"] = path

        super().__init__(message)
        self.path: str | None = path
        self.context: dict[str, object] = full_context


class DirectoryNotFoundError(ScanError):
    """Raised when a directory does not exist."""


class DirectoryPermissionError(ScanError):
    """Raised when a directory cannot be listed due to permissions."""


class DirectoryReadError(ScanError):
    """Raised for any other I/O failure while listing a directory."""


class ScanTimeoutError(ScanError):
    """Raised when a scan exceeds its deadline."""

    def __init__(self, path: str, timeout_seconds: float) -> None:
        super().__init__(
            f"Scan of {path} did not finish within {timeout_seconds:.2f}s",
            path=path,
            context={"timeout_seconds": timeout_seconds},
        )
        self.timeout_seconds: float = timeout_seconds


class ScanCancelledError(ScanError):
    """Raised when a scan is cancelled through its cancellation token."""


def classify_os_error(exc: OSError, path: str) -> ScanError:
    """Map an ``OSError`` raised while listing ``path`` to a scan error.

    Args:
        exc: The original error
        path: Directory that was being listed

    Returns:
        The classified error, chained to ``exc`` by the caller
    """
    reason = exc.strerror or str(exc)
    context: dict[str, object] = {"errno": exc.errno}

    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        return DirectoryNotFoundError(f"Directory does not exist: {path}", path, context)
    if isinstance(exc, PermissionError) or exc.errno in (errno.EACCES, errno.EPERM):
        return DirectoryPermissionError(f"Permission denied: {path}", path, context)
    return DirectoryReadError(f"Cannot read directory {path}: {reason}", path, context)
