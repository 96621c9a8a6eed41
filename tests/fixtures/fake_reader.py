"""In-memory directory reader for scanner tests."""

from __future__ import annotations

import posixpath
import threading
import time
from collections.abc import Mapping

from dirsize.core.errors import DirectoryNotFoundError
from dirsize.types.models import RawEntry

# A layout maps entry names to a file size (int), a nested layout (dict),
# or an error message for a file whose metadata cannot be read (str).
type Layout = Mapping[str, int | str | Layout]

GIB = 1024**3


class FakeDirectoryReader:
    """Test double implementing the DirectoryReader Protocol.

    Records every read, tracks how many reads overlap in time and can inject
    a classified error for any directory.
    """

    def __init__(self, *, delay: float = 0.0) -> None:
        self.delay: float = delay
        self.directories: dict[str, list[RawEntry]] = {}
        self.errors: dict[str, Exception] = {}
        self.reads: list[str] = []
        self.in_flight: int = 0
        self.peak: int = 0
        self._lock: threading.Lock = threading.Lock()

    @classmethod
    def from_layout(cls, root: str, layout: Layout, *, delay: float = 0.0) -> FakeDirectoryReader:
        """Build a reader serving ``layout`` below the absolute path ``root``."""
        reader = cls(delay=delay)
        reader.add_directory(root, layout)
        return reader

    def add_directory(self, path: str, layout: Layout) -> None:
        entries: list[RawEntry] = []
        for name, value in layout.items():
            child_path = posixpath.join(path, name)
            if isinstance(value, int):
                entries.append(RawEntry(name=name, path=child_path, is_dir=False, size=value))
            elif isinstance(value, str):
                entries.append(RawEntry(name=name, path=child_path, is_dir=False, error=value))
            else:
                entries.append(RawEntry(name=name, path=child_path, is_dir=True))
                self.add_directory(child_path, value)
        self.directories[path] = entries

    def fail(self, path: str, error: Exception) -> None:
        """Make every read of ``path`` raise ``error``, classified or not."""
        self.errors[path] = error

    def read_entries(self, path: str) -> list[RawEntry]:
        with self._lock:
            self.reads.append(path)
            self.in_flight += 1
            self.peak = max(self.peak, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            if path in self.errors:
                raise self.errors[path]
            if path not in self.directories:
                raise DirectoryNotFoundError(f"Directory does not exist: {path}", path)
            return list(self.directories[path])
        finally:
            with self._lock:
                self.in_flight -= 1
