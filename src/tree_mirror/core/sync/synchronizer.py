"""Top-level synchronization of a source tree onto a destination tree.

This module ties together diffing, the task queue, and the executor:

1. Validate that both paths are existing directories
2. Plan every task (scan both trees)
3. Report what will be deleted and copied
4. Execute the plan
5. Report the paths that failed
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ...config import Config
from .executor import DEFAULT_CHUNK_SIZE, DEFAULT_CHUNKS_PER_REPORT, SyncExecutor
from .progress import NullProgressSink, ProgressSink
from .session import SyncSession
from .tree_differ import TreeDiffer

logger = logging.getLogger(__name__)


class SyncError(Exception):
    """Base exception for synchronization errors."""

    pass


class InvalidPathsError(SyncError):
    """Raised when the source or destination is not an existing directory."""

    def __init__(self, source: Path, destination: Path) -> None:
        self.source = source
        self.destination = destination
        super().__init__(
            f"invalid paths: (source: {source}) (destination: {destination})"
        )


class TreeSynchronizer:
    """Mirrors a source directory tree onto a destination directory tree."""

    def __init__(
        self,
        source: Union[str, Path],
        destination: Union[str, Path],
        sink: Optional[ProgressSink] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunks_per_report: int = DEFAULT_CHUNKS_PER_REPORT,
    ):
        """Initialize the synchronizer.

        Args:
            source: Directory to mirror
            destination: Directory made identical to the source
            sink: Receives status lines and percentages
            chunk_size: Bytes per copy step
            chunks_per_report: Copy steps between two progress reports
        """
        self.source = Path(source)
        self.destination = Path(destination)
        self.sink: ProgressSink = sink or NullProgressSink()
        self.differ = TreeDiffer(sink=self.sink)
        self.executor = SyncExecutor(
            sink=self.sink,
            chunk_size=chunk_size,
            chunks_per_report=chunks_per_report,
        )

    @classmethod
    def from_config(
        cls,
        source: Union[str, Path],
        destination: Union[str, Path],
        config: Config,
        sink: Optional[ProgressSink] = None,
    ) -> "TreeSynchronizer":
        """Create a synchronizer using the configured copy settings."""
        return cls(
            source,
            destination,
            sink=sink,
            chunk_size=config.chunk_size,
            chunks_per_report=config.chunks_per_report,
        )

    def paths_valid(self) -> bool:
        """Check that both paths are existing directories."""
        return self.source.is_dir() and self.destination.is_dir()

    def synchronize(self) -> SyncSession:
        """Run a full synchronization.

        Per-item failures never raise; they are collected in the returned
        session and written to the sink after execution.

        Returns:
            Session with counters and failure lists

        Raises:
            InvalidPathsError: If either path is not an existing directory
        """
        if not self.paths_valid():
            error = InvalidPathsError(self.source, self.destination)
            logger.error(str(error))
            self.sink.write_line(str(error))
            raise error

        logger.info("Synchronizing %s -> %s", self.source, self.destination)
        session = SyncSession()

        self.sink.write_line("scanning...")
        queue = self.differ.plan(self.source, self.destination, session)

        self.sink.rewrite_lines(
            [
                "scanning complete",
                f"{queue.directories_to_delete} directories "
                f"{queue.files_to_delete} files to delete",
            ]
        )
        self.sink.write_line(f"\n{queue.files_to_copy} files to copy")

        self.sink.write_line("\nsyncing...\n\n")
        self.executor.execute(queue, session)

        self._report_failures("failed to scan", session.failed_to_scan)
        self._report_failures("failed to delete", session.failed_to_delete)
        self._report_failures("failed to copy", session.failed_to_copy)

        logger.info("Synchronization finished: %s", session.get_summary())
        return session

    def _report_failures(self, title: str, items: List[str]) -> None:
        if not items:
            return
        self.sink.write_line(f"\n{title}:")
        for item in items:
            self.sink.write_line(item)


def synchronize(
    source: Union[str, Path],
    destination: Union[str, Path],
    sink: Optional[ProgressSink] = None,
    config: Optional[Config] = None,
) -> SyncSession:
    """Mirror ``source`` onto ``destination``.

    Args:
        source: Directory to mirror
        destination: Directory made identical to the source
        sink: Optional progress sink
        config: Optional configuration; copy settings default otherwise

    Returns:
        Session with counters and failure lists

    Raises:
        InvalidPathsError: If either path is not an existing directory
    """
    if config is None:
        synchronizer = TreeSynchronizer(source, destination, sink=sink)
    else:
        synchronizer = TreeSynchronizer.from_config(
            source, destination, config, sink=sink
        )
    return synchronizer.synchronize()
