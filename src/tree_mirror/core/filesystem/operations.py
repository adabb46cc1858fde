"""Low-level filesystem operations used by the executor."""

import logging
import os
import stat
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

IS_WINDOWS = sys.platform == "win32"

# FILETIME counts 100ns intervals since 1601-01-01 UTC
FILETIME_EPOCH_OFFSET = 116_444_736_000_000_000

_GENERIC_WRITE = 0x40000000
_FILE_SHARE_READ_WRITE = 0x00000001 | 0x00000002
_OPEN_EXISTING = 3
_FILE_ATTRIBUTE_NORMAL = 0x80


def delete_file(path: Path) -> None:
    """Delete a file if it exists."""
    path.unlink(missing_ok=True)


def _remove_entry(path: Path) -> None:
    """Remove one entry of a tree being deleted, logging failures."""
    try:
        if path.is_dir() and not path.is_symlink():
            path.rmdir()
        else:
            path.unlink()
    except OSError as e:
        logger.warning("Cannot remove %s: %s", path, e)


def delete_directory(directory: Path) -> None:
    """Delete a directory tree, deepest entries first.

    Entries inside the tree that cannot be removed are logged and skipped.
    Removing the directory itself is not guarded, so a tree that could not be
    emptied (or a directory that no longer exists) raises ``OSError``.
    """
    if directory.is_symlink():
        directory.unlink()
        return

    for root, dirs, files in os.walk(directory, topdown=False):
        root_path = Path(root)
        for name in files:
            _remove_entry(root_path / name)
        for name in dirs:
            _remove_entry(root_path / name)

    directory.rmdir()


def clear_readonly(path: Path) -> None:
    """Give the owner write access to a file or directory.

    On Windows this clears the read-only attribute. Directories also get owner
    read and search access so their entries can be removed.
    """
    if path.is_symlink():
        return
    mode = stat.S_IMODE(path.stat().st_mode)
    if path.is_dir():
        path.chmod(mode | stat.S_IRWXU)
    else:
        path.chmod(mode | stat.S_IWRITE)


def force_delete(path: Path, is_file: bool) -> None:
    """Clear read-only flags and delete again.

    For a directory every contained entry is made writable before the tree is
    removed.

    Raises:
        OSError: If the path still cannot be deleted
    """
    if is_file:
        clear_readonly(path)
        path.unlink()
        return

    clear_readonly(path)
    for root, dirs, files in os.walk(path):
        root_path = Path(root)
        for name in dirs + files:
            entry = root_path / name
            try:
                clear_readonly(entry)
            except OSError as e:
                logger.warning("Cannot clear read-only flag on %s: %s", entry, e)
    delete_directory(path)


def creation_time_ns(file_stat: os.stat_result) -> int:
    """Get the creation time recorded in a stat result.

    Uses ``st_birthtime_ns`` where the platform reports it. On Windows before
    Python 3.12 ``st_ctime_ns`` holds the creation time.
    """
    birthtime = getattr(file_stat, "st_birthtime_ns", None)
    if birthtime is not None:
        return birthtime
    return file_stat.st_ctime_ns


def to_filetime(timestamp_ns: int) -> int:
    """Convert nanoseconds since the Unix epoch to a Windows FILETIME."""
    return timestamp_ns // 100 + FILETIME_EPOCH_OFFSET


def set_creation_time_windows(path: Path, timestamp_ns: int) -> None:
    """Set a file's creation time through ``SetFileTime``.

    Access and modification times are left unchanged.

    Raises:
        OSError: If the file cannot be opened or its time cannot be set
    """
    import ctypes
    from ctypes import wintypes

    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
    kernel32.CreateFileW.argtypes = [
        wintypes.LPCWSTR,
        wintypes.DWORD,
        wintypes.DWORD,
        wintypes.LPVOID,
        wintypes.DWORD,
        wintypes.DWORD,
        wintypes.HANDLE,
    ]
    kernel32.CreateFileW.restype = wintypes.HANDLE
    kernel32.SetFileTime.argtypes = [
        wintypes.HANDLE,
        ctypes.POINTER(wintypes.FILETIME),
        ctypes.POINTER(wintypes.FILETIME),
        ctypes.POINTER(wintypes.FILETIME),
    ]
    kernel32.SetFileTime.restype = wintypes.BOOL
    kernel32.CloseHandle.argtypes = [wintypes.HANDLE]

    handle = kernel32.CreateFileW(
        str(path),
        _GENERIC_WRITE,
        _FILE_SHARE_READ_WRITE,
        None,
        _OPEN_EXISTING,
        _FILE_ATTRIBUTE_NORMAL,
        None,
    )
    if handle == wintypes.HANDLE(-1).value:
        raise ctypes.WinError(ctypes.get_last_error())

    try:
        filetime = to_filetime(timestamp_ns)
        creation = wintypes.FILETIME(filetime & 0xFFFFFFFF, filetime >> 32)
        if not kernel32.SetFileTime(handle, ctypes.byref(creation), None, None):
            raise ctypes.WinError(ctypes.get_last_error())
    finally:
        kernel32.CloseHandle(handle)


def copy_file_times(source: Path, destination: Path) -> None:
    """Copy the source's modification and creation times onto the destination.

    The destination keeps its own access time. Creation time is only set on
    Windows; elsewhere no system call can change it and the destination keeps
    the time the platform assigned when the file was written.

    Raises:
        OSError: If either time cannot be set
    """
    source_stat = source.stat()
    destination_stat = destination.stat()
    os.utime(
        destination,
        ns=(destination_stat.st_atime_ns, source_stat.st_mtime_ns),
    )
    if IS_WINDOWS:
        set_creation_time_windows(destination, creation_time_ns(source_stat))
