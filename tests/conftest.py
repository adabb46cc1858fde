"""Shared fixtures for tree mirror tests."""

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple

import pytest


class RecordingProgressSink:
    """Progress sink that records every call."""

    def __init__(self) -> None:
        self.lines: List[str] = []
        self.rewrites: List[List[str]] = []
        self.progress: List[Tuple[List[str], int]] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)

    def rewrite_lines(self, lines: List[str]) -> None:
        self.rewrites.append(list(lines))

    def rewrite_lines_with_progress(self, lines: List[str], percentage: int) -> None:
        self.progress.append((list(lines), percentage))

    @property
    def percentages(self) -> List[int]:
        return [percentage for _, percentage in self.progress]


def make_file(
    path: Path, content: bytes = b"", mtime_ns: Optional[int] = None
) -> Path:
    """Create a file with content and an optional modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    if mtime_ns is not None:
        os.utime(path, ns=(mtime_ns, mtime_ns))
    return path


def relative_entries(root: Path) -> set:
    """Get every path below root, relative to root."""
    return {path.relative_to(root) for path in root.rglob("*")}


@pytest.fixture
def temp_dirs():
    """Create temporary source and destination directories."""
    with (
        tempfile.TemporaryDirectory() as source_dir,
        tempfile.TemporaryDirectory() as destination_dir,
    ):
        yield Path(source_dir), Path(destination_dir)


@pytest.fixture
def sink():
    """Create a recording progress sink."""
    return RecordingProgressSink()


@pytest.fixture(name="make_file")
def make_file_fixture():
    """Provide the file factory helper."""
    return make_file


@pytest.fixture(name="relative_entries")
def relative_entries_fixture():
    """Provide the relative path listing helper."""
    return relative_entries


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
