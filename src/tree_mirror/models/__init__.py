"""Models for the tree mirroring application."""

from .models import Task, TaskKind

__all__ = [
    "Task",
    "TaskKind",
]
