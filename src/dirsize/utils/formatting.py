"""Pure formatting utilities for human-readable output.

This module provides stateless formatting functions for converting raw byte
counts into human-readable strings. All functions are pure with no side
effects.
"""

# Binary unit constants (1024-based)
_KB = 1024
_MB = _KB * 1024  # 1,048,576
_GB = _MB * 1024  # 1,073,741,824


def format_size(size: int) -> str:
    """Convert bytes to a human-readable size.

    Uses binary units (1024-based). Values below one kilobyte are shown as a
    plain byte count; larger values use two decimal places, topping out at
    gigabytes.

    Args:
        size: Number of bytes to format (must be non-negative)

    Returns:
        Human-readable string representation of the size

    Examples:
        >>> format_size(512)
        '512 bytes'
        >>> format_size(1536)
        '1.50 KB'
        >>> format_size(5242880)
        '5.00 MB'
        >>> format_size(3 * 1024**4)
        '3072.00 GB'
    """
    if size < 0:
        msg = "size must be non-negative"
        raise ValueError(msg)

    if size < _KB:
        return f"{size} bytes"
    if size < _MB:
        return f"{size / _KB:.2f} KB"
    if size < _GB:
        return f"{size / _MB:.2f} MB"
    return f"{size / _GB:.2f} GB"
