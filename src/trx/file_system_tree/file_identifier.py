"""File identifier for uniquely identifying directories by device and inode."""

import os
from typing import NamedTuple


class FileIdentifier(NamedTuple):
    """Identity of a file or directory based on its device and inode numbers.

    The builder keeps the identifiers of the directories on the current
    ancestor chain; a followed symlink whose target is already on the chain
    would recurse forever, so it is reported as a link instead.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.

    Note:
        On Windows, st_ino is synthesized by Python's os.stat but is still stable
        enough for loop detection.

    Example:
        >>> FileIdentifier(1, 42) == FileIdentifier(1, 42)
        True
    """

    device_id: int
    inode_number: int

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> "FileIdentifier":
        """Build an identifier from a stat result."""
        return cls(stat_result.st_dev, stat_result.st_ino)
