"""Permission action enum for reporting unreadable entries during directory traversal."""

from enum import Enum


class PermissionAction(str, Enum):
    """How to report entries that are skipped because they cannot be read.

    Unreadable entries never abort a scan; this only controls how loudly they
    are reported.

    Values:
        IGNORE: Skip silently, logging at DEBUG level (default behavior)
        WARN: Skip and log a WARNING for each inaccessible item
    """

    IGNORE = "ignore"
    WARN = "warn"
