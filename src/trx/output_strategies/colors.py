"""Semantic color mapping for tree entries and its ANSI rendering via rich."""

from typing import Dict

from rich.color import ColorSystem
from rich.style import Style

from trx.file_system_tree.dir_node import DirNode
from trx.types import FileType

KIND_STYLES: Dict[FileType, str] = {
    FileType.DIRECTORY: "blue",
    FileType.EXECUTABLE: "bold green",
    FileType.SYMLINK: "bold cyan",
    FileType.FILE: "",
}

READ_ONLY_STYLE = "on red"


def style_for(node: DirNode) -> str:
    """Return the rich style definition for a node, or an empty string for none.

    Example:
        >>> from pathlib import Path
        >>> style_for(DirNode(Path("src"), FileType.DIRECTORY, read_only=True))
        'blue on red'
        >>> style_for(DirNode(Path("notes.txt"), FileType.FILE))
        ''
    """
    parts = [KIND_STYLES[node.kind]]
    if node.read_only:
        parts.append(READ_ONLY_STYLE)
    return " ".join(part for part in parts if part)


def colorize(text: str, style: str) -> str:
    """Wrap text in the ANSI escape codes for a style definition."""
    if not style:
        return text
    return Style.parse(style).render(text, color_system=ColorSystem.STANDARD)
