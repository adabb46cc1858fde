"""Filesystem module.

Deletion helpers and timestamp preservation for the executor.
"""

from .operations import (
    clear_readonly,
    copy_file_times,
    delete_directory,
    delete_file,
    force_delete,
)

__all__ = [
    "clear_readonly",
    "copy_file_times",
    "delete_directory",
    "delete_file",
    "force_delete",
]
