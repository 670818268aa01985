"""Unit tests for the semantic color mapping."""

from pathlib import Path

import pytest

from trx.file_system_tree.dir_node import DirNode
from trx.output_strategies.colors import colorize, style_for
from trx.types import FileType


@pytest.mark.parametrize(
    "node,expected",
    [
        (DirNode(Path("d"), FileType.DIRECTORY), "blue"),
        (DirNode(Path("x"), FileType.EXECUTABLE), "bold green"),
        (DirNode(Path("l"), FileType.SYMLINK, symlink_target="t"), "bold cyan"),
        (DirNode(Path("f"), FileType.FILE), ""),
        (DirNode(Path("f"), FileType.FILE, read_only=True), "on red"),
        (DirNode(Path("d"), FileType.DIRECTORY, read_only=True), "blue on red"),
    ],
)
def test_style_for(node, expected):
    assert style_for(node) == expected


def test_colorize():
    assert colorize("src", "blue") == "\x1b[34msrc\x1b[0m"
    assert colorize("src", "blue on red") == "\x1b[34;41msrc\x1b[0m"
    assert colorize("plain", "") == "plain"
