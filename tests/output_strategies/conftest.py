"""Shared trees for output strategy tests."""

from pathlib import Path

import pytest

from trx.file_system_tree.dir_node import DirNode
from trx.types import FileType


@pytest.fixture
def sample_tree():
    """A small tree with every kind of node.

    project
    ├── src
    │   ├── main.py
    │   └── run.sh
    ├── docs
    │   └── guide
    │       └── intro.md
    ├── current -> src
    └── LICENSE (read-only)
    """
    root = DirNode(Path("project"), FileType.DIRECTORY)
    src = DirNode(Path("project/src"), FileType.DIRECTORY)
    src.children = [
        DirNode(Path("project/src/main.py"), FileType.FILE),
        DirNode(Path("project/src/run.sh"), FileType.EXECUTABLE),
    ]
    guide = DirNode(Path("project/docs/guide"), FileType.DIRECTORY)
    guide.children = [DirNode(Path("project/docs/guide/intro.md"), FileType.FILE)]
    docs = DirNode(Path("project/docs"), FileType.DIRECTORY, children=[guide])
    root.children = [
        src,
        docs,
        DirNode(Path("project/current"), FileType.SYMLINK, symlink_target="src"),
        DirNode(Path("project/LICENSE"), FileType.FILE, read_only=True),
    ]
    return root
