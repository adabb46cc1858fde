"""Recursive comparison of a source tree against a destination tree.

Diffing is the planning half of a synchronization run. It walks both trees
level by level and returns the ordered tasks needed to make the destination
mirror the source, together with an estimate of the work involved.

For every directory level the steps run in this order:

1. destination subdirectories missing from the source are scheduled for
   deletion (one work unit each);
2. source subdirectories are created in the destination when missing, then
   diffed recursively, each subtree completing before the next one starts;
3. destination files missing from the source are scheduled for deletion; then
   files whose modification times differ are scheduled for deletion followed
   by a copy (one unit plus the source size);
4. source files missing from the destination are scheduled for copy (their
   size in bytes).

A level's directory deletions therefore come before anything from its
children, and its file operations come after everything from its children.
"""

import logging
import os
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ...models import Task
from .progress import NullProgressSink, ProgressSink
from .session import SyncSession
from .task_queue import TaskQueue

logger = logging.getLogger(__name__)


@dataclass
class DirectoryListing:
    """Immediate children of a directory.

    Attributes:
        directories: Subdirectories, sorted by name
        files: Everything that is not a directory, sorted by name
        error: Error raised while listing, if any
    """

    directories: List[Path] = dataclass_field(default_factory=list)
    files: List[Path] = dataclass_field(default_factory=list)
    error: Optional[OSError] = None

    @property
    def directories_by_name(self) -> Dict[str, Path]:
        return {path.name: path for path in self.directories}

    @property
    def files_by_name(self) -> Dict[str, Path]:
        return {path.name: path for path in self.files}


@dataclass
class DiffResult:
    """Ordered tasks and work estimate for one subtree.

    Attributes:
        tasks: Tasks in execution order
        total_work: Delete count plus bytes to copy
        scan_failures: ``(source: ...) (destination: ...)`` pairs that failed
        created_directories: Destination directories created while diffing
        uncreated_directories: Destination directories that could not be created
        unlisted_directories: Directories that could not be listed and were
            treated as empty
    """

    tasks: List[Task] = dataclass_field(default_factory=list)
    total_work: int = 0
    scan_failures: List[str] = dataclass_field(default_factory=list)
    created_directories: List[Path] = dataclass_field(default_factory=list)
    uncreated_directories: List[Path] = dataclass_field(default_factory=list)
    unlisted_directories: List[Path] = dataclass_field(default_factory=list)

    def add(self, task: Task, work: int) -> None:
        """Append a task and its share of the work estimate."""
        self.tasks.append(task)
        self.total_work += work

    def extend(self, other: "DiffResult") -> None:
        """Append a child subtree's result after everything added so far."""
        self.tasks.extend(other.tasks)
        self.total_work += other.total_work
        self.scan_failures.extend(other.scan_failures)
        self.created_directories.extend(other.created_directories)
        self.uncreated_directories.extend(other.uncreated_directories)
        self.unlisted_directories.extend(other.unlisted_directories)

    def __repr__(self) -> str:
        return (
            f"DiffResult(tasks={len(self.tasks)}, total_work={self.total_work}, "
            f"scan_failures={len(self.scan_failures)})"
        )


def list_directory(directory: Path) -> DirectoryListing:
    """List the immediate children of a directory.

    Symbolic links are classified by what they point to, as the platform
    reports it. A directory that cannot be listed yields an empty listing with
    the error attached.
    """
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        return DirectoryListing(error=e)

    listing = DirectoryListing()
    for entry in entries:
        path = directory / entry.name
        try:
            is_dir = entry.is_dir()
        except OSError:
            is_dir = False
        if is_dir:
            listing.directories.append(path)
        else:
            listing.files.append(path)
    return listing


def modification_millis(path: Path) -> int:
    """Get a file's last-modified time truncated to milliseconds."""
    return path.stat().st_mtime_ns // 1_000_000


def scan_entry(source: Path, destination: Path) -> str:
    """Format a (source, destination) pair for the failed-to-scan report."""
    return f"(source: {source}) (destination: {destination})"


class TreeDiffer:
    """Plans the tasks that make a destination tree mirror a source tree."""

    def __init__(self, sink: Optional[ProgressSink] = None) -> None:
        """Initialize the differ.

        Args:
            sink: Receives the directory currently being scanned
        """
        self.sink: ProgressSink = sink or NullProgressSink()

    def plan(self, source: Path, destination: Path, session: SyncSession) -> TaskQueue:
        """Diff both trees and record the outcome in the session.

        Args:
            source: Existing source directory
            destination: Existing destination directory
            session: Session receiving the work estimate and scan failures

        Returns:
            Queue holding every planned task in execution order
        """
        result = self.diff(source, destination)

        session.total_work += result.total_work
        for entry in result.scan_failures:
            session.add_scan_failure(entry)

        logger.info(
            "Planned %d tasks (total work %d) for %s -> %s",
            len(result.tasks),
            result.total_work,
            source,
            destination,
        )
        return TaskQueue(result.tasks)

    def diff(self, source: Path, destination: Path) -> DiffResult:
        """Diff one (source, destination) directory pair and its subtrees.

        An error that escapes a level is recorded as a scan failure for that
        pair; tasks already produced for the level are kept.
        """
        self.sink.rewrite_lines([str(source)])

        result = DiffResult()
        try:
            self._diff_level(source, destination, result)
        except OSError as e:
            entry = scan_entry(source, destination)
            logger.warning("Failed to scan directories %s: %s", entry, e)
            result.scan_failures.append(entry)
        return result

    def _diff_level(self, source: Path, destination: Path, result: DiffResult) -> None:
        source_listing = self._list(source, result)
        destination_listing = self._list(destination, result)

        source_dirs = source_listing.directories_by_name
        source_files = source_listing.files_by_name
        destination_files = destination_listing.files_by_name

        # 1. destination directories without a source counterpart
        for directory in destination_listing.directories:
            if directory.name not in source_dirs:
                logger.debug("Plan delete directory: %s", directory)
                result.add(Task.make_delete(directory, is_file=False), 1)

        # 2. create missing destination directories, then descend
        for directory in source_listing.directories:
            child_destination = destination / directory.name
            if not child_destination.is_dir():
                if self._create_directory(child_destination):
                    result.created_directories.append(child_destination)
                else:
                    result.uncreated_directories.append(child_destination)
            result.extend(self.diff(directory, child_destination))

        # 3. destination files that are stale, then files that changed
        changed: List[Tuple[Path, Path]] = []
        for file in destination_listing.files:
            source_file = source_files.get(file.name)
            if source_file is None:
                logger.debug("Plan delete file: %s", file)
                result.add(Task.make_delete(file, is_file=True), 1)
            elif modification_millis(source_file) != modification_millis(file):
                changed.append((source_file, file))

        for source_file, file in changed:
            logger.debug("Plan replace changed file: %s", file)
            result.add(Task.make_delete(file, is_file=True), 1)
            result.add(Task.make_copy(source_file, file), source_file.stat().st_size)

        # 4. source files missing from the destination
        for file in source_listing.files:
            if file.name not in destination_files:
                destination_file = destination / file.name
                logger.debug("Plan copy: %s -> %s", file, destination_file)
                result.add(Task.make_copy(file, destination_file), file.stat().st_size)

    def _list(self, directory: Path, result: DiffResult) -> DirectoryListing:
        # A directory that cannot be listed is diffed as if it were empty.
        listing = list_directory(directory)
        if listing.error is not None:
            logger.warning(
                "Cannot list %s, treating as empty: %s", directory, listing.error
            )
            result.unlisted_directories.append(directory)
        return listing

    def _create_directory(self, directory: Path) -> bool:
        """Create a destination directory, best effort.

        Returns:
            True if the directory was created, False otherwise
        """
        try:
            directory.mkdir()
        except OSError as e:
            logger.warning("Cannot create directory %s: %s", directory, e)
            return False
        logger.debug("Created directory: %s", directory)
        return True
