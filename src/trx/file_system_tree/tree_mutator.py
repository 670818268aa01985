"""Post-construction transforms for DirNode trees: sorting, pruning and counting."""

import os
from typing import NamedTuple

from anytree import PostOrderIter, PreOrderIter

from trx.file_system_tree.dir_node import DirNode
from trx.types import FileType


class TreeCounts(NamedTuple):
    """Number of entries of each kind in a tree, not counting the root."""

    directories: int
    files: int
    symlinks: int


def sort_tree(node: DirNode) -> None:
    """Sort the children of every node in the tree by path, in place.

    Paths are unique within a directory, so the order is total and sorting an
    already sorted tree leaves it unchanged.

    Example:
        >>> from pathlib import Path
        >>> root = DirNode(Path("r"), FileType.DIRECTORY)
        >>> root.children = [DirNode(Path("r/b"), FileType.FILE), DirNode(Path("r/a"), FileType.FILE)]
        >>> sort_tree(root)
        >>> [child.name for child in root.children]
        ['a', 'b']
    """
    for current in PreOrderIter(node):
        if current.children:
            current.children = sorted(current.children, key=lambda child: os.fspath(child.path))


def has_content(node: DirNode) -> bool:
    """Check whether a node holds anything worth showing.

    A non-directory always counts as content. A directory counts only if it has
    at least one child that counts as content, i.e. some non-directory below it.
    """
    return any(current.kind is not FileType.DIRECTORY for current in PreOrderIter(node))


def prune_tree(node: DirNode) -> None:
    """Remove directories without content below node, in place.

    Pruning is post-order: each child's subtree is pruned first, and the
    children of a node are then filtered using the already-pruned subtrees. The
    node itself is never removed, so the root survives even when empty.

    Example:
        >>> from pathlib import Path
        >>> root = DirNode(Path("r"), FileType.DIRECTORY)
        >>> empty = DirNode(Path("r/empty"), FileType.DIRECTORY)
        >>> nested = DirNode(Path("r/empty/nested"), FileType.DIRECTORY, parent=empty)
        >>> root.children = [empty, DirNode(Path("r/file.txt"), FileType.FILE)]
        >>> prune_tree(root)
        >>> [child.name for child in root.children]
        ['file.txt']
    """
    for current in PostOrderIter(node):
        # Directory children are already pruned: they have content iff anything is left in them.
        current.children = [
            child for child in current.children if child.kind is not FileType.DIRECTORY or child.children
        ]


def count_nodes(node: DirNode) -> TreeCounts:
    """Count the directories, files and symlinks below node.

    Executables count as files.
    """
    directories = files = symlinks = 0
    for descendant in PreOrderIter(node):
        if descendant is node:
            continue
        if descendant.kind is FileType.DIRECTORY:
            directories += 1
        elif descendant.kind is FileType.SYMLINK:
            symlinks += 1
        else:
            files += 1
    return TreeCounts(directories, files, symlinks)
