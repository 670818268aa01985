"""HTML output strategy rendering a tree as nested lists."""

import os
from typing import Dict
from xml.sax.saxutils import escape as xml_escape

from trx.file_system_tree.dir_node import DirNode
from trx.types import FileType

from .base_strategy import TreeOutputStrategy
from .format_options import FormatOptions

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
{styles}{colors}</style>
</head>
<body>
{body}
</body>
</html>
"""

STYLES = """ul { list-style-type: none; padding-left: 1.5em; border-left: 1px dotted #999; }
span, a { font-family: monospace; white-space: pre; }
"""

COLORS = """.dir { color: blue; }
.exe { color: green; font-weight: bold; }
.link { color: darkcyan; font-weight: bold; }
.ro { background-color: #f4c7c3; }
"""

KIND_CLASSES: Dict[FileType, str] = {
    FileType.DIRECTORY: "dir",
    FileType.EXECUTABLE: "exe",
    FileType.SYMLINK: "link",
    FileType.FILE: "file",
}


class HTMLOutputStrategy(TreeOutputStrategy):
    """Output strategy that renders a tree as a standalone HTML page.

    Each node is a ``<span>`` (or an ``<a>`` pointing at the node's path when
    emit_links is set) with a CSS class for its kind (``dir``, ``exe``, ``link``
    or ``file``) plus ``ro`` when read-only. Children are nested ``<ul>`` lists.
    The color stylesheet is only included when colorize is set. Names and paths
    are escaped with xml.sax.saxutils.escape.

    Example:
        >>> from pathlib import Path
        >>> node = DirNode(Path("a&b.txt"), FileType.FILE, read_only=True)
        >>> HTMLOutputStrategy().render_node(node, FormatOptions())
        '<span class="file ro">a&amp;b.txt</span>'
    """

    def __init__(self) -> None:
        """Initialize the HTML output strategy."""
        self._attribute_entities = {
            '"': "&quot;",
            "'": "&apos;",
        }

    def render(self, tree: DirNode, options: FormatOptions) -> str:
        return HTML_TEMPLATE.format(
            title=xml_escape(os.fspath(tree.path)),
            styles=STYLES,
            colors=COLORS if options.colorize else "",
            body=self.render_node(tree, options),
        )

    def get_file_extension(self) -> str:
        return ".html"

    def render_node(self, node: DirNode, options: FormatOptions) -> str:
        """Render a node and its subtree as an HTML fragment."""
        name = xml_escape(self.format_name(node, options))
        css_class = KIND_CLASSES[node.kind]
        if node.read_only:
            css_class += " ro"

        if options.emit_links:
            href = xml_escape(os.fspath(node.path), self._attribute_entities)
            out = f'<a class="{css_class}" href="{href}">{name}</a>'
        else:
            out = f'<span class="{css_class}">{name}</span>'

        if node.children:
            items = "".join(f"<li>{self.render_node(child, options)}</li>" for child in node.children)
            out += f"<ul>{items}</ul>"

        return out
