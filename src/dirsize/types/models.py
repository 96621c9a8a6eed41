"""Data models for dirsize.

This module defines immutable dataclasses describing the scanned filesystem
tree. A tree is built once per scan, bottom-up, and never mutated afterwards.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class FileEntry:
    """A single file found during a scan.

    Attributes:
        name: Base name of the file
        full_path: Absolute path of the file
        size: Size in bytes (0 when the file metadata could not be read)
        is_dir: Always False for plain files
    """

    name: str
    full_path: str
    size: int
    is_dir: bool = False


@dataclass(slots=True, frozen=True)
class DirectoryEntry:
    """A directory together with its immediate files and kept subdirectories.

    The aggregate ``size`` is sealed at construction. Use :meth:`build` to
    compute it from the immediate files and the kept children.
    """

    name: str
    full_path: str
    size: int
    files: tuple[FileEntry, ...] = ()
    children: tuple["DirectoryEntry", ...] = ()
    is_dir: bool = field(default=True, init=False)

    @classmethod
    def build(
        cls,
        *,
        name: str,
        full_path: str,
        files: Iterable[FileEntry] = (),
        children: Iterable["DirectoryEntry"] = (),
        size: int | None = None,
    ) -> "DirectoryEntry":
        """Create a directory entry, aggregating its size bottom-up.

        Args:
            name: Base name of the directory
            full_path: Absolute path of the directory
            files: Immediate files in listing order
            children: Kept child directories in discovery order
            size: Explicit aggregate size; computed from files and children
                when omitted

        Returns:
            The sealed directory entry
        """
        files = tuple(files)
        children = tuple(children)
        if size is None:
            size = sum(f.size for f in files) + sum(c.size for c in children)
        return cls(
            name=name,
            full_path=full_path,
            size=size,
            files=files,
            children=children,
        )

    @property
    def own_size(self) -> int:
        """Total size of the immediate files only."""
        return sum(f.size for f in self.files)

    @property
    def file_count(self) -> int:
        """Number of files in this directory and every kept descendant."""
        return sum(len(node.files) for node in self.iter_tree())

    @property
    def directory_count(self) -> int:
        """Number of directory nodes in the kept subtree, including this one."""
        return sum(1 for _ in self.iter_tree())

    def iter_tree(self) -> Iterator["DirectoryEntry"]:
        """Yield this node and its kept descendants in pre-order."""
        stack: list[DirectoryEntry] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(slots=True, frozen=True)
class RawEntry:
    """An immediate directory entry as returned by a directory reader.

    ``error`` holds the metadata lookup failure for the entry, if any. Such
    entries carry ``size == 0``.
    """

    name: str
    path: str
    is_dir: bool
    size: int = 0
    error: str | None = None


@dataclass(slots=True, frozen=True)
class ScanReport:
    """Recoverable events collected while scanning.

    Lets callers tell a clean scan apart from one that silently dropped
    unreadable subtrees or recorded files with unknown sizes.
    """

    dropped_directories: tuple[str, ...] = ()
    unreadable_files: tuple[str, ...] = ()

    @property
    def is_complete(self) -> bool:
        """True when nothing was dropped or recorded with an unknown size."""
        return not self.dropped_directories and not self.unreadable_files


@dataclass(slots=True, frozen=True)
class ScanOutcome:
    """Result of a scan together with its report of recoverable events.

    Attributes:
        root: The filtered tree, or None when the root was rejected
        report: Recoverable events recorded during the scan
        hoisted: Kept top-level matches below a rejected root when matches
            propagate; empty otherwise
    """

    root: DirectoryEntry | None
    report: ScanReport
    hoisted: tuple[DirectoryEntry, ...] = ()
