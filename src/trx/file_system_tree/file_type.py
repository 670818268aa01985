"""Leaf classification and permission snapshots taken from stat results."""

import os
import stat
from pathlib import Path

from trx.types import FileType

EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
WRITE_BITS = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH

# Used where the platform has no execute permission bit
EXECUTABLE_EXTENSIONS = frozenset({".exe", ".com", ".bat", ".cmd"})


def supports_exec_bit() -> bool:
    """Return True if the platform records an execute permission bit on files."""
    return os.name == "posix"


def classify_leaf(path: Path, stat_result: os.stat_result) -> FileType:
    """Classify a non-directory entry as EXECUTABLE or FILE.

    On platforms with permission bits, any execute bit makes the entry
    executable. Elsewhere the file extension decides.

    Args:
        path: Path of the entry.
        stat_result: Stat result of the entry (following symlinks).

    Returns:
        FileType: FileType.EXECUTABLE or FileType.FILE.
    """
    if supports_exec_bit():
        return FileType.EXECUTABLE if stat_result.st_mode & EXECUTE_BITS else FileType.FILE
    return FileType.EXECUTABLE if path.suffix.lower() in EXECUTABLE_EXTENSIONS else FileType.FILE


def is_read_only(stat_result: os.stat_result) -> bool:
    """Return True if no write permission bit is set."""
    return not stat_result.st_mode & WRITE_BITS
