"""Shared utility modules for common operations.

This package provides:
- Data size formatting (bytes to human-readable)
- Logging setup with structured output and scan ID tracking
"""

from dirsize.utils.formatting import format_size

__all__ = [
    "format_size",
]
