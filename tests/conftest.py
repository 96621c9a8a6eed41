"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from dirsize.utils.logging import clear_scan_id
from tests.fixtures.fake_reader import FakeDirectoryReader


@pytest.fixture(autouse=True)
def _reset_scan_id() -> Generator[None, None, None]:
    """Make sure no scan ID leaks between tests."""
    clear_scan_id()
    yield
    clear_scan_id()


@pytest.fixture
def sample_reader() -> FakeDirectoryReader:
    """A small in-memory tree.

    /data            (10 bytes own)
    ├── a            (100 bytes own)
    │   └── deep     (1000 bytes own)
    └── b            (50 bytes own)
    """
    return FakeDirectoryReader.from_layout(
        "/data",
        {
            "readme.txt": 10,
            "a": {"one.bin": 60, "two.bin": 40, "deep": {"blob.bin": 1000}},
            "b": {"notes.txt": 50},
        },
    )


@pytest.fixture
def disk_tree(tmp_path: Path) -> Path:
    """A small tree on the real filesystem.

    tmp/
    ├── top.txt      (5 bytes)
    ├── docs/
    │   ├── a.txt    (100 bytes)
    │   └── b.txt    (20 bytes)
    └── media/
        └── clips/
            └── c.bin (300 bytes)
    """
    _ = (tmp_path / "top.txt").write_bytes(b"x" * 5)
    docs = tmp_path / "docs"
    docs.mkdir()
    _ = (docs / "a.txt").write_bytes(b"x" * 100)
    _ = (docs / "b.txt").write_bytes(b"x" * 20)
    clips = tmp_path / "media" / "clips"
    clips.mkdir(parents=True)
    _ = (clips / "c.bin").write_bytes(b"x" * 300)
    return tmp_path

