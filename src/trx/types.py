from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class FileType(Enum):
    """Enumeration of the kinds of entry a tree node can represent.

    The kind of a node is resolved once when the node is created and never
    recomputed. Only DIRECTORY nodes may carry children; SYMLINK nodes carry
    the raw target of the link instead.

    Attributes:
        DIRECTORY: Directory (or a followed symlink to one)
        EXECUTABLE: File with an execute permission bit set
        FILE: Regular file
        SYMLINK: Symbolic link that was not followed
    """

    DIRECTORY = "directory"
    EXECUTABLE = "executable"
    FILE = "file"
    SYMLINK = "link"
