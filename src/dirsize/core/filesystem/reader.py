"""Directory reader backed by ``os.scandir``."""

from __future__ import annotations

import os

from dirsize.core.errors import classify_os_error
from dirsize.types.models import RawEntry

__all__ = ["OsDirectoryReader"]


class OsDirectoryReader:
    """List immediate directory entries from the local filesystem.

    Symbolic links are never followed: a link to a directory is reported as a
    plain entry sized by the link itself. Metadata failures on individual
    entries are reported on the entry instead of failing the whole listing.
    """

    def read_entries(self, path: str) -> list[RawEntry]:
        """List the immediate entries of ``path``.

        Args:
            path: Directory to list

        Returns:
            Entries in listing order

        Raises:
            DirectoryNotFoundError: If ``path`` does not exist
            DirectoryPermissionError: If ``path`` cannot be listed
            DirectoryReadError: For any other I/O failure
        """
        try:
            with os.scandir(path) as iterator:
                return [self._to_raw_entry(entry) for entry in iterator]
        except OSError as exc:
            raise classify_os_error(exc, path) from exc

    def _to_raw_entry(self, entry: os.DirEntry[str]) -> RawEntry:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            return RawEntry(name=entry.name, path=entry.path, is_dir=False, error=str(exc))

        if is_dir:
            return RawEntry(name=entry.name, path=entry.path, is_dir=True)

        try:
            size = entry.stat(follow_symlinks=False).st_size
        except OSError as exc:
            return RawEntry(name=entry.name, path=entry.path, is_dir=False, error=str(exc))
        return RawEntry(name=entry.name, path=entry.path, is_dir=False, size=size)
