"""JSON output strategy for tree serialization."""

import json
import os
from typing import Any, Dict

from trx.file_system_tree.dir_node import DirNode
from trx.types import FileType

from .base_strategy import TreeOutputStrategy
from .format_options import FormatOptions


class JSONOutputStrategy(TreeOutputStrategy):
    """Output strategy that serializes a tree as a nested JSON object.

    Each node becomes an object with the following structure:
    {
        "name": "display name",
        "path": "path/as/scanned",
        "type": "directory" | "executable" | "file" | "link",
        "read_only": false,
        "target": "raw/link/target",   # only for links
        "contents": [...]               # only for non-empty directories
    }

    The display name honors full_paths, quote_names and decorate. With indent
    the document is pretty-printed with two spaces.

    Example:
        >>> from pathlib import Path
        >>> node = DirNode(Path("src/link"), FileType.SYMLINK, symlink_target="../lib")
        >>> JSONOutputStrategy().to_dict(node, FormatOptions())
        {'name': 'link', 'path': 'src/link', 'type': 'link', 'read_only': False, 'target': '../lib'}
    """

    def render(self, tree: DirNode, options: FormatOptions) -> str:
        indent = 2 if options.indent else None
        return json.dumps(self.to_dict(tree, options), indent=indent, ensure_ascii=False) + "\n"

    def get_file_extension(self) -> str:
        return ".json"

    def to_dict(self, node: DirNode, options: FormatOptions) -> Dict[str, Any]:
        """Convert a node and its subtree into JSON-compatible dictionaries."""
        data: Dict[str, Any] = {
            "name": self.format_name(node, options),
            "path": os.fspath(node.path),
            "type": node.kind.value,
            "read_only": node.read_only,
        }
        if node.kind is FileType.SYMLINK:
            data["target"] = node.symlink_target
        if node.children:
            data["contents"] = [self.to_dict(child, options) for child in node.children]
        return data
