"""Filtering-aware filesystem tree construction.

This package builds DirNode trees from a directory on disk, applying hidden-file,
glob, .gitignore, symlink and depth policies, and provides the post-construction
transforms (sorting and pruning) applied before rendering.
"""

from .dir_node import DirNode
from .permission_action import PermissionAction
from .search_options import SearchOptions
from .tree_builder import SkippedEntry, TreeBuilder, build_tree
from .tree_mutator import TreeCounts, count_nodes, has_content, prune_tree, sort_tree

__all__ = [
    "DirNode",
    "PermissionAction",
    "SearchOptions",
    "SkippedEntry",
    "TreeBuilder",
    "TreeCounts",
    "build_tree",
    "count_nodes",
    "has_content",
    "prune_tree",
    "sort_tree",
]
