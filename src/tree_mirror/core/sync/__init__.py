"""Synchronization module.

Handles tree diffing, the task queue, task execution, and progress reporting.
"""

from .executor import SyncExecutor
from .progress import NullProgressSink, ProgressModel, ProgressPhase, ProgressSink
from .session import SyncSession
from .synchronizer import InvalidPathsError, SyncError, TreeSynchronizer, synchronize
from .task_queue import TaskQueue
from .tree_differ import DiffResult, DirectoryListing, TreeDiffer, list_directory

__all__ = [
    # Planning
    "DiffResult",
    "DirectoryListing",
    "TreeDiffer",
    "TaskQueue",
    "list_directory",
    # Execution
    "SyncExecutor",
    "SyncSession",
    # Progress
    "NullProgressSink",
    "ProgressModel",
    "ProgressPhase",
    "ProgressSink",
    # Orchestration
    "InvalidPathsError",
    "SyncError",
    "TreeSynchronizer",
    "synchronize",
]
