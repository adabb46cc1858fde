"""State of a single synchronization run."""

import logging
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import Dict, List

logger = logging.getLogger(__name__)


@dataclass
class SyncSession:
    """Counters and failure lists shared by the differ and the executor.

    A session lives for one ``synchronize()`` call; nothing in it is persisted.
    """

    total_work: int = 0
    failed_to_scan: List[str] = dataclass_field(default_factory=list)
    failed_to_delete: List[str] = dataclass_field(default_factory=list)
    failed_to_copy: List[str] = dataclass_field(default_factory=list)
    directories_deleted: int = 0
    files_deleted: int = 0
    files_copied: int = 0
    bytes_copied: int = 0

    def add_scan_failure(self, entry: str) -> None:
        """Record a (source, destination) pair that could not be diffed."""
        self.failed_to_scan.append(entry)

    def add_delete_failure(self, path: str) -> None:
        """Record a destination path that could not be deleted."""
        self.failed_to_delete.append(path)
        logger.warning("Failed to delete: %s", path)

    def add_copy_failure(self, path: str) -> None:
        """Record a source path that could not be copied."""
        self.failed_to_copy.append(path)
        logger.warning("Failed to copy: %s", path)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed_to_scan or self.failed_to_delete or self.failed_to_copy)

    def get_summary(self) -> Dict[str, int]:
        """Get summary statistics."""
        return {
            "directories_deleted": self.directories_deleted,
            "files_deleted": self.files_deleted,
            "files_copied": self.files_copied,
            "bytes_copied": self.bytes_copied,
            "failed_to_scan": len(self.failed_to_scan),
            "failed_to_delete": len(self.failed_to_delete),
            "failed_to_copy": len(self.failed_to_copy),
        }
