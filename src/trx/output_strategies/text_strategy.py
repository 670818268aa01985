"""Indented text output strategy using box-drawing connectors."""

from typing import Iterator, Tuple

from trx.file_system_tree.dir_node import DirNode
from trx.types import FileType

from .base_strategy import TreeOutputStrategy
from .colors import colorize, style_for
from .format_options import FormatOptions

SUPER_DIR = "│"
PARENT_NTH = "├"
PARENT_LAST = "└"
INDENT = "── "


class TextOutputStrategy(TreeOutputStrategy):
    """Output strategy that renders a tree as indented text, one line per node.

    With indentation enabled, every child line starts with one column per
    ancestor level (a continuation bar while that ancestor still has siblings
    below, blank padding otherwise) followed by a branch connector. Without
    indentation the names are simply listed in tree order.

    Symlinks are shown as ``name -> target``.

    Example:
        >>> from pathlib import Path
        >>> root = DirNode(Path("project"), FileType.DIRECTORY)
        >>> src = DirNode(Path("project/src"), FileType.DIRECTORY)
        >>> main = DirNode(Path("project/src/main.py"), FileType.FILE, parent=src)
        >>> root.children = [src, DirNode(Path("project/README.md"), FileType.FILE)]
        >>> print(TextOutputStrategy().render(root, FormatOptions()), end="")
        project
        ├── src
        │   └── main.py
        └── README.md
    """

    def render(self, tree: DirNode, options: FormatOptions) -> str:
        return "".join(self.stream(tree, options))

    def stream(self, tree: DirNode, options: FormatOptions) -> Iterator[str]:
        """Generate the rendering one newline-terminated line at a time."""
        yield from self._stream_node(tree, options, (), "")

    def get_file_extension(self) -> str:
        return ".txt"

    def format_line(self, node: DirNode, options: FormatOptions) -> str:
        """Format the text of a node's line, without connectors or newline."""
        name = self.format_name(node, options)
        if options.colorize:
            name = colorize(name, style_for(node))
        if node.kind is FileType.SYMLINK:
            name = f"{name} -> {node.symlink_target}"
        return name

    def _stream_node(
        self, node: DirNode, options: FormatOptions, nest: Tuple[bool, ...], connector: str
    ) -> Iterator[str]:
        # nest[i] is True while the ancestor at level i still has siblings below
        yield f"{connector}{self.format_line(node, options)}\n"

        last_index = len(node.children) - 1
        for index, child in enumerate(node.children):
            is_last = index == last_index
            if options.indent:
                bars = "".join(f"{SUPER_DIR if more else ' ':4}" for more in nest)
                child_connector = bars + (PARENT_LAST if is_last else PARENT_NTH) + INDENT
            else:
                child_connector = ""
            yield from self._stream_node(child, options, nest + (not is_last,), child_connector)
