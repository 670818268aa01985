"""Node representation for filesystem entries in the tree."""

from pathlib import Path
from typing import Iterable, Optional

from anytree import Node

from trx.types import FileType


class DirNode(Node):  # type: ignore
    """One filesystem entry in a scanned tree.

    Extends anytree.Node with the facts recorded about the entry when it was
    scanned. The kind of a node is decided once, when it is built. Only
    DIRECTORY nodes may have children, and only SYMLINK nodes carry a symlink
    target (the raw, unresolved text of the link). A followed symlink is
    recorded with the kind of its target, never as a SYMLINK with children.

    After construction a tree is only re-sorted (sort_tree) or pruned
    (prune_tree). Rendering state such as indentation is passed to the output
    strategies as arguments and never stored here. Traversal uses anytree's
    iterators (PreOrderIter and friends).

    Attributes:
        name (str): Basename of the entry, or ``.`` when the path has none.
        path (Path): Filesystem path of the entry, as reached from the scan root.
            This replaces anytree's root-to-node tuple; use ``iter_path_reverse()``
            for the chain of nodes.
        kind (FileType): What the entry is.
        read_only (bool): Whether the entry had no write permission when scanned.
        children (tuple[DirNode]): Expanded entries of a directory, in order
            (inherited from anytree.Node).
        symlink_target (Optional[str]): Raw link target for SYMLINK nodes.

    Example:
        >>> from pathlib import Path
        >>> root = DirNode(Path("project"), FileType.DIRECTORY)
        >>> main = DirNode(Path("project/main.py"), FileType.FILE, parent=root)
        >>> root.name, root.children[0].name
        ('project', 'main.py')
        >>> DirNode(Path("project/main.py"), FileType.FILE, children=[root])
        Traceback (most recent call last):
        ...
        ValueError: Only directory nodes may have children: project/main.py
    """

    def __init__(
        self,
        path: Path,
        kind: FileType,
        read_only: bool = False,
        symlink_target: Optional[str] = None,
        parent: Optional["DirNode"] = None,
        children: Optional[Iterable["DirNode"]] = None,
    ) -> None:
        if (kind is FileType.SYMLINK) != (symlink_target is not None):
            raise ValueError(f"A symlink target is required for symlink nodes and only for them: {path}")
        # Set before anytree attaches anything: _pre_attach reads the parent's kind.
        self._fs_path = path
        self.kind = kind
        self.read_only = read_only
        self.symlink_target = symlink_target
        super().__init__(path.name or ".", parent=parent, children=children)

    @property
    def path(self) -> Path:  # type: ignore[override]
        return self._fs_path

    @property
    def is_dir(self) -> bool:
        return self.kind is FileType.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is FileType.SYMLINK

    def _pre_attach(self, parent: "DirNode") -> None:
        if parent.kind is not FileType.DIRECTORY:
            raise ValueError(f"Only directory nodes may have children: {parent.path}")

    def __repr__(self) -> str:
        return f"DirNode({self._fs_path!r}, {self.kind})"
