"""Data models for the tree mirroring application."""

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class TaskKind(str, Enum):
    """Kinds of filesystem operation produced by diffing."""

    DELETE = "delete"
    COPY = "copy"


class Task(BaseModel):
    """Represents a single planned filesystem operation.

    A DELETE task carries no source path; ``is_file`` tells whether the
    destination is removed as a file or as a whole directory. A COPY task
    always refers to a file.
    """

    kind: TaskKind
    source_path: Optional[Path] = None
    destination_path: Path
    is_file: bool = True

    model_config = ConfigDict(frozen=True)

    @classmethod
    def make_delete(
        cls, destination_path: Union[str, Path], is_file: bool
    ) -> "Task":
        """Create a delete task for a file or a directory."""
        return cls(
            kind=TaskKind.DELETE,
            destination_path=destination_path,
            is_file=is_file,
        )

    @classmethod
    def make_copy(
        cls, source_path: Union[str, Path], destination_path: Union[str, Path]
    ) -> "Task":
        """Create a copy task from a source file to a destination file."""
        return cls(
            kind=TaskKind.COPY,
            source_path=source_path,
            destination_path=destination_path,
            is_file=True,
        )

    @property
    def is_delete(self) -> bool:
        """Check if this task removes something from the destination."""
        return self.kind == TaskKind.DELETE

    @property
    def is_copy(self) -> bool:
        """Check if this task copies a file into the destination."""
        return self.kind == TaskKind.COPY

    @field_validator("source_path", "destination_path", mode="before")
    @classmethod
    def validate_paths(cls, v: Union[str, Path, None]) -> Optional[Path]:
        """Convert input to Path object."""
        if v is not None:
            return Path(v)
        return v

    @model_validator(mode="after")
    def check_paths_for_kind(self) -> "Task":
        """Validate that the paths match the task kind."""
        if self.kind == TaskKind.COPY:
            if self.source_path is None:
                raise ValueError("copy task requires a source path")
            if not self.is_file:
                raise ValueError("copy task must refer to a file")
        elif self.source_path is not None:
            raise ValueError("delete task must not have a source path")
        return self

    def describe(self) -> str:
        """Get the status line shown while this task runs."""
        if self.is_copy:
            return f"copy {self.source_path}"
        return f"delete {self.destination_path}"
