"""Tests for flattened and size-ordered views."""

from __future__ import annotations

from dirsize.core.flatten import flatten, reorder, sort_by_size, sort_files_by_size
from dirsize.types.models import DirectoryEntry, FileEntry


def _dir(name: str, size: int, *children: DirectoryEntry) -> DirectoryEntry:
    return DirectoryEntry.build(name=name, full_path=f"/{name}", children=children, size=size)


class TestFlatten:
    """Test pre-order flattening."""

    def test_none_root(self) -> None:
        """Test a filtered-out root flattens to nothing."""
        assert flatten(None) == []

    def test_preorder(self) -> None:
        """Test each node precedes its subtree and siblings keep their order."""
        root = _dir("r", 10, _dir("a", 5, _dir("a1", 1), _dir("a2", 2)), _dir("b", 3))

        assert [entry.name for entry in flatten(root)] == ["r", "a", "a1", "a2", "b"]

    def test_single_node(self) -> None:
        """Test a leaf root flattens to itself."""
        root = _dir("r", 0)

        assert flatten(root) == [root]


class TestSortBySize:
    """Test ordering by size."""

    def test_largest_first(self) -> None:
        """Test entries are ordered by descending size."""
        entries = [_dir("a", 1), _dir("b", 3), _dir("c", 2)]

        assert [entry.name for entry in sort_by_size(entries)] == ["b", "c", "a"]

    def test_ties_keep_order(self) -> None:
        """Test entries of equal size keep their relative order."""
        entries = [_dir("a", 2), _dir("b", 5), _dir("c", 2), _dir("d", 2)]

        assert [entry.name for entry in sort_by_size(entries)] == ["b", "a", "c", "d"]

    def test_does_not_mutate_input(self) -> None:
        """Test the input sequence is left untouched."""
        entries = [_dir("a", 1), _dir("b", 3)]

        _ = sort_by_size(entries)

        assert [entry.name for entry in entries] == ["a", "b"]

    def test_reorder(self) -> None:
        """Test reorder flattens then sorts."""
        root = _dir("r", 10, _dir("a", 4, _dir("a1", 4)), _dir("b", 6))

        assert [entry.name for entry in reorder(root)] == ["r", "b", "a", "a1"]

    def test_reorder_none(self) -> None:
        """Test reorder of a filtered-out root is empty."""
        assert reorder(None) == []

    def test_sort_files_by_size(self) -> None:
        """Test files are ordered largest first with stable ties."""
        files = [FileEntry("a", "/a", 1), FileEntry("b", "/b", 9), FileEntry("c", "/c", 1)]

        assert [f.name for f in sort_files_by_size(files)] == ["b", "a", "c"]
