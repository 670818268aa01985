"""Output strategy base class defining the interface for tree rendering.

This module provides the abstract base class that all tree renderers implement,
together with the name formatting they share.
"""

import os
from abc import ABC, abstractmethod
from typing import Dict

from trx.file_system_tree.dir_node import DirNode
from trx.types import FileType

from .format_options import FormatOptions

DECORATIONS: Dict[FileType, str] = {
    FileType.DIRECTORY: "/",
    FileType.EXECUTABLE: "*",
    FileType.SYMLINK: "@",
    FileType.FILE: "",
}


class TreeOutputStrategy(ABC):
    """Abstract base class for tree output formats.

    Strategies read only the path, kind, read_only, children and symlink_target
    of each node. Format options are passed into every call instead of being
    stored on the tree, so one tree can be rendered several times with different
    options.

    Example:
        >>> from pathlib import Path
        >>> from anytree import PreOrderIter
        >>> class NameListStrategy(TreeOutputStrategy):
        ...     def render(self, tree: DirNode, options: FormatOptions) -> str:
        ...         return "".join(self.format_name(n, options) + "\\n" for n in PreOrderIter(tree))
        ...
        ...     def get_file_extension(self) -> str:
        ...         return ".lst"
        >>> root = DirNode(Path("src"), FileType.DIRECTORY)
        >>> print(NameListStrategy().render(root, FormatOptions(decorate=True)), end="")
        src/
    """

    @abstractmethod
    def render(self, tree: DirNode, options: FormatOptions) -> str:
        """Render a complete tree.

        Args:
            tree: Root node of the tree to render.
            options: Formatting options.

        Returns:
            str: The rendered document.
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the file extension conventionally used for this format.

        Returns:
            str: The extension, including the leading dot.
        """
        pass

    def format_name(self, node: DirNode, options: FormatOptions) -> str:
        """Format a node's display name without colors.

        The name is the full path or the basename (``.`` when there is none),
        optionally quoted and optionally followed by a type decoration.
        """
        name = os.fspath(node.path) if options.full_paths else node.name
        if options.quote_names:
            name = f'"{name}"'
        if options.decorate:
            name += DECORATIONS[node.kind]
        return name
