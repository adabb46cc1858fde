"""Progress reporting for synchronization runs.

The executor counts completed deletes and copied bytes in one running total,
and the diff pass estimates the work the same way. ``ProgressModel`` keeps that
mixed-unit arithmetic in one place; everything else only asks it for a
percentage or an info line.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Protocol

logger = logging.getLogger(__name__)

MEGABYTE = 1024 * 1024


class ProgressPhase(str, Enum):
    """Phases of a synchronization run."""

    PENDING = "pending"
    DELETING = "deleting"
    COPYING = "copying"
    COMPLETE = "complete"


class ProgressSink(Protocol):
    """Receiver of status lines and percentages."""

    def write_line(self, text: str) -> None:
        """Emit a single status line."""
        ...

    def rewrite_lines(self, lines: List[str]) -> None:
        """Overwrite the transient status lines."""
        ...

    def rewrite_lines_with_progress(self, lines: List[str], percentage: int) -> None:
        """Overwrite the transient status lines and draw a progress bar."""
        ...


class NullProgressSink:
    """Progress sink that discards everything."""

    def write_line(self, text: str) -> None:
        pass

    def rewrite_lines(self, lines: List[str]) -> None:
        pass

    def rewrite_lines_with_progress(self, lines: List[str], percentage: int) -> None:
        pass


def _percent(done: int, total: int) -> int:
    if total <= 0:
        return 0
    return max(0, min(100, (done * 100) // total))


@dataclass
class ProgressModel:
    """Running progress of the executor.

    Attributes:
        units_total: Work estimate from diffing (delete count plus copy bytes)
        task_count: Number of tasks in the queue when execution started
        units_done: Completed deletes plus bytes written so far
        phase: What the executor is doing right now
    """

    units_total: int
    task_count: int
    units_done: int = 0
    phase: ProgressPhase = ProgressPhase.PENDING

    def advance(self, units: int = 1) -> None:
        """Add completed units (one delete, or a number of bytes)."""
        self.units_done += units

    def task_percentage(self) -> int:
        """Percentage reported at a task boundary.

        Divides by the number of tasks, not by the work estimate.
        """
        return _percent(self.units_done, self.task_count)

    def byte_percentage(self) -> int:
        """Percentage reported while a copy is streaming."""
        return _percent(self.units_done, self.units_total)

    def info_line(self) -> str:
        """Get the ``done / total MB`` status line."""
        return (
            f"{self.units_done // MEGABYTE} / {self.units_total // MEGABYTE} MB"
        )

    def complete(self) -> None:
        """Mark the run as finished."""
        self.phase = ProgressPhase.COMPLETE
        logger.debug(
            "Progress complete: %d of %d units", self.units_done, self.units_total
        )
