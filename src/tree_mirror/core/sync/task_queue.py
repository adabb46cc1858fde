"""FIFO queue of planned filesystem tasks."""

from collections import deque
from typing import Deque, Iterable, Iterator, Optional

from ...models import Task, TaskKind


class TaskQueue:
    """Ordered sequence of tasks, consumed exactly once."""

    def __init__(self, tasks: Optional[Iterable[Task]] = None) -> None:
        self._tasks: Deque[Task] = deque(tasks or ())

    def enqueue(self, task: Task) -> None:
        """Append a task at the end of the queue."""
        self._tasks.append(task)

    def extend(self, tasks: Iterable[Task]) -> None:
        """Append tasks in order."""
        self._tasks.extend(tasks)

    def drain(self) -> Iterator[Task]:
        """Yield tasks in insertion order, removing each one as it is yielded."""
        while self._tasks:
            yield self._tasks.popleft()

    def count(self, kind: TaskKind, is_file: bool) -> int:
        """Count pending tasks of one kind and target type."""
        return sum(
            1 for task in self._tasks if task.kind == kind and task.is_file == is_file
        )

    @property
    def directories_to_delete(self) -> int:
        return self.count(TaskKind.DELETE, is_file=False)

    @property
    def files_to_delete(self) -> int:
        return self.count(TaskKind.DELETE, is_file=True)

    @property
    def files_to_copy(self) -> int:
        return self.count(TaskKind.COPY, is_file=True)

    def peek_all(self) -> list[Task]:
        """Get a snapshot of pending tasks without consuming them."""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __bool__(self) -> bool:
        return bool(self._tasks)

    def __repr__(self) -> str:
        return (
            f"TaskQueue(dirs_to_delete={self.directories_to_delete}, "
            f"files_to_delete={self.files_to_delete}, "
            f"files_to_copy={self.files_to_copy})"
        )
