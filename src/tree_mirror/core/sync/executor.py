"""Executor that applies planned tasks to the destination tree.

This module drains a ``TaskQueue`` in order, reporting progress before each
task and periodically while large files are copied. A failed task is recorded
in the session and the executor moves on to the next one.
"""

import logging
from typing import Optional

from ...models import Task
from ..filesystem.operations import (
    copy_file_times,
    delete_directory,
    delete_file,
    force_delete,
)
from .progress import NullProgressSink, ProgressModel, ProgressPhase, ProgressSink
from .session import SyncSession
from .task_queue import TaskQueue

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4 * 1024
DEFAULT_CHUNKS_PER_REPORT = 256


class SyncExecutor:
    """Applies delete and copy tasks with progress reporting."""

    def __init__(
        self,
        sink: Optional[ProgressSink] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunks_per_report: int = DEFAULT_CHUNKS_PER_REPORT,
    ):
        """Initialize the executor.

        Args:
            sink: Receives status lines and percentages
            chunk_size: Bytes read and written per copy step
            chunks_per_report: Copy steps between two progress reports
        """
        if chunk_size < 1 or chunks_per_report < 1:
            raise ValueError("chunk_size and chunks_per_report must be positive")
        self.sink: ProgressSink = sink or NullProgressSink()
        self.chunk_size = chunk_size
        self.chunks_per_report = chunks_per_report

    def execute(self, queue: TaskQueue, session: SyncSession) -> ProgressModel:
        """Apply every queued task exactly once, in queue order.

        Args:
            queue: Planned tasks; drained by this call
            session: Session holding the work estimate and failure lists

        Returns:
            Final progress state
        """
        progress = ProgressModel(
            units_total=session.total_work, task_count=len(queue)
        )
        logger.info(
            "Executing %d tasks (total work %d)",
            progress.task_count,
            progress.units_total,
        )

        for task in queue.drain():
            percentage = progress.task_percentage()

            if task.is_delete:
                progress.phase = ProgressPhase.DELETING
                self._report(task, progress, percentage)
                self._execute_delete(task, session)
                progress.advance()
            else:
                progress.phase = ProgressPhase.COPYING
                self._report(task, progress, percentage)
                self._execute_copy(task, session, progress)

        progress.complete()
        self.sink.rewrite_lines_with_progress(["", "syncing complete"], 100)
        self.sink.write_line("")

        logger.info("Execution finished: %s", session.get_summary())
        return progress

    def _report(self, task: Task, progress: ProgressModel, percentage: int) -> None:
        self.sink.rewrite_lines_with_progress(
            [task.describe(), progress.info_line()], percentage
        )

    def _execute_delete(self, task: Task, session: SyncSession) -> None:
        """Delete a file or directory, retrying once with force-delete.

        Args:
            task: Delete task
            session: Session to update
        """
        path = task.destination_path
        logger.debug("Deleting %s", path)

        try:
            if task.is_file:
                delete_file(path)
            else:
                delete_directory(path)
        except OSError as e:
            logger.warning("Delete failed for %s, forcing: %s", path, e)
            try:
                force_delete(path, task.is_file)
            except OSError as ex:
                logger.warning("Force delete failed for %s: %s", path, ex)
                session.add_delete_failure(str(path))
                return

        if task.is_file:
            session.files_deleted += 1
        else:
            session.directories_deleted += 1

    def _execute_copy(
        self, task: Task, session: SyncSession, progress: ProgressModel
    ) -> None:
        """Stream a file into the destination and copy its timestamps.

        A failure leaves whatever was already written in place.

        Args:
            task: Copy task
            session: Session to update
            progress: Running progress, advanced by every byte written
        """
        source = task.source_path
        destination = task.destination_path
        if source is None:
            raise ValueError(f"copy task without source path: {task!r}")
        logger.debug("Copying %s -> %s", source, destination)

        written = 0
        try:
            with open(source, "rb") as src, open(destination, "wb") as dst:
                chunks = 0
                while chunk := src.read(self.chunk_size):
                    dst.write(chunk)
                    written += len(chunk)
                    progress.advance(len(chunk))
                    chunks += 1
                    if chunks == self.chunks_per_report:
                        self._report(task, progress, progress.byte_percentage())
                        chunks = 0

            copy_file_times(source, destination)
        except OSError as e:
            logger.warning("Copy failed for %s: %s", source, e)
            session.add_copy_failure(str(source))
            return

        session.files_copied += 1
        session.bytes_copied += written
