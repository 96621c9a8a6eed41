"""Protocol definitions for scanner collaborators.

This module defines structural subtyping protocols that establish
contracts for the capabilities the scanner consumes without requiring
inheritance.
"""

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from dirsize.types.models import RawEntry


@runtime_checkable
class DirectoryReader(Protocol):
    """Protocol for listing the immediate entries of a directory.

    Implementations must be safe to call from several worker threads at once.
    """

    def read_entries(self, path: str) -> list[RawEntry]:
        """List the immediate entries of ``path``.

        Args:
            path: Directory to list

        Returns:
            Entries in listing order

        Raises:
            ScanError: Classified failure when ``path`` cannot be listed
        """
        ...


@runtime_checkable
class ScanLogger(Protocol):
    """Four-level diagnostic logging capability.

    ``logging.Logger`` satisfies this protocol. Structured context is passed
    through the ``extra`` mapping.
    """

    def debug(self, msg: str, *, extra: Mapping[str, object] | None = None) -> None: ...

    def info(self, msg: str, *, extra: Mapping[str, object] | None = None) -> None: ...

    def warning(self, msg: str, *, extra: Mapping[str, object] | None = None) -> None: ...

    def error(self, msg: str, *, extra: Mapping[str, object] | None = None) -> None: ...
