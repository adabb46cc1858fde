"""Tree Mirror.

One-way mirroring of a source directory tree onto a destination directory
tree, with byte-level progress reporting and per-item failure isolation.
"""

__version__ = "1.0.0"

from .config import Config
from .core.sync import (
    InvalidPathsError,
    SyncError,
    SyncSession,
    TaskQueue,
    TreeDiffer,
    TreeSynchronizer,
    synchronize,
)
from .models import Task, TaskKind

__all__ = [
    "Config",
    "InvalidPathsError",
    "SyncError",
    "SyncSession",
    "Task",
    "TaskKind",
    "TaskQueue",
    "TreeDiffer",
    "TreeSynchronizer",
    "synchronize",
]
