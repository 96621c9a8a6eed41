"""Property-based tests for scan invariants using Hypothesis.

These tests build random in-memory trees and check properties that must hold
for every tree: size aggregation, flattening and ordering.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from dirsize.core.filters import size_filter
from dirsize.core.flatten import flatten, reorder
from dirsize.core.scanner import DirectoryScanner
from tests.fixtures.fake_reader import FakeDirectoryReader, Layout

_NAMES = st.text(alphabet="abcdefghij", min_size=1, max_size=6)


def _layouts() -> st.SearchStrategy[Layout]:
    """Nested layouts of files (int sizes) and subdirectories (dicts)."""
    files = st.integers(min_value=0, max_value=10_000)
    return st.recursive(
        st.dictionaries(_NAMES, files, max_size=4),
        lambda children: st.dictionaries(_NAMES, st.one_of(files, children), max_size=4),
        max_leaves=25,
    )


def _total_file_size(layout: Layout) -> int:
    total = 0
    for value in layout.values():
        if isinstance(value, int):
            total += value
        elif not isinstance(value, str):
            total += _total_file_size(value)
    return total


def _directory_count(layout: Layout) -> int:
    return 1 + sum(_directory_count(value) for value in layout.values() if isinstance(value, dict))


class TestScanInvariants:
    """Property-based tests over random trees."""

    @settings(max_examples=50, deadline=None)
    @given(_layouts())
    def test_root_size_is_sum_of_files(self, layout: Layout) -> None:
        """Property: with no filter the root size equals every file size summed."""
        reader = FakeDirectoryReader.from_layout("/root", layout)

        root = DirectoryScanner(reader, max_concurrency=3).scan_sync("/root")

        assert root is not None
        assert root.size == _total_file_size(layout)

    @settings(max_examples=50, deadline=None)
    @given(_layouts())
    def test_flatten_visits_every_directory(self, layout: Layout) -> None:
        """Property: the flat view has one entry per directory."""
        reader = FakeDirectoryReader.from_layout("/root", layout)

        root = DirectoryScanner(reader).scan_sync("/root")

        flat = flatten(root)
        assert len(flat) == _directory_count(layout)
        assert len({entry.full_path for entry in flat}) == len(flat)

    @settings(max_examples=50, deadline=None)
    @given(_layouts(), st.integers(min_value=0, max_value=20_000))
    def test_reorder_non_increasing_and_stable(self, layout: Layout, threshold: int) -> None:
        """Property: the ordered view is non-increasing, ties keep pre-order."""
        reader = FakeDirectoryReader.from_layout("/root", layout)

        root = DirectoryScanner(reader).scan_sync("/root", size_filter(threshold))

        preorder = [entry.full_path for entry in flatten(root)]
        ordered = reorder(root)
        for previous, current in zip(ordered, ordered[1:], strict=False):
            assert previous.size >= current.size
            if previous.size == current.size:
                assert preorder.index(previous.full_path) < preorder.index(current.full_path)

    @settings(max_examples=50, deadline=None)
    @given(_layouts(), st.integers(min_value=0, max_value=20_000))
    def test_kept_sizes_are_exact(self, layout: Layout, threshold: int) -> None:
        """Property: every kept node equals its files plus its kept children."""
        reader = FakeDirectoryReader.from_layout("/root", layout)

        root = DirectoryScanner(reader).scan_sync("/root", size_filter(threshold))

        for entry in flatten(root):
            assert entry.size > threshold
            assert entry.size == entry.own_size + sum(child.size for child in entry.children)
