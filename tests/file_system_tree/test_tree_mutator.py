"""Unit tests for sorting, pruning and counting trees."""

from pathlib import Path

import pytest
from anytree import PreOrderIter

from trx.file_system_tree.dir_node import DirNode
from trx.file_system_tree.search_options import SearchOptions
from trx.file_system_tree.tree_builder import build_tree
from trx.file_system_tree.tree_mutator import TreeCounts, count_nodes, has_content, prune_tree, sort_tree
from trx.types import FileType


def directory(path, *children):
    node = DirNode(Path(path), FileType.DIRECTORY)
    node.children = list(children)
    return node


def leaf(path, kind=FileType.FILE):
    if kind is FileType.SYMLINK:
        return DirNode(Path(path), kind, symlink_target="target")
    return DirNode(Path(path), kind)


def names(node):
    return [child.name for child in node.children]


def snapshot(tree):
    return [(node.path, node.kind, node.depth) for node in PreOrderIter(tree)]


@pytest.fixture
def unsorted_tree():
    return directory(
        "r",
        leaf("r/zeta.txt"),
        directory("r/beta", leaf("r/beta/b"), leaf("r/beta/a")),
        leaf("r/Alpha.txt"),
        directory("r/alpha", leaf("r/alpha/z"), directory("r/alpha/m")),
    )


def test_sort_tree_orders_by_path(unsorted_tree):
    sort_tree(unsorted_tree)
    assert names(unsorted_tree) == ["Alpha.txt", "alpha", "beta", "zeta.txt"]
    assert names(unsorted_tree.children[2]) == ["a", "b"]
    assert names(unsorted_tree.children[1]) == ["m", "z"]


def test_sort_tree_is_idempotent(unsorted_tree):
    sort_tree(unsorted_tree)
    once = [node.path for node in PreOrderIter(unsorted_tree)]
    sort_tree(unsorted_tree)
    assert [node.path for node in PreOrderIter(unsorted_tree)] == once


@pytest.mark.parametrize(
    "node,expected",
    [
        (leaf("f"), True),
        (leaf("x", FileType.EXECUTABLE), True),
        (leaf("l", FileType.SYMLINK), True),
        (directory("d"), False),
        (directory("d", directory("d/e")), False),
        (directory("d", directory("d/e", leaf("d/e/f"))), True),
    ],
)
def test_has_content(node, expected):
    assert has_content(node) is expected


def test_prune_removes_nested_empty_directories():
    tree = directory(
        "r",
        directory("r/empty", directory("r/empty/deeper", directory("r/empty/deeper/deepest"))),
        directory("r/mixed", directory("r/mixed/empty"), leaf("r/mixed/file")),
        directory("r/linked", leaf("r/linked/l", FileType.SYMLINK)),
        leaf("r/top"),
    )
    prune_tree(tree)

    assert names(tree) == ["mixed", "linked", "top"]
    assert names(tree.children[0]) == ["file"]


def test_prune_keeps_the_root():
    tree = directory("r", directory("r/empty"))
    prune_tree(tree)
    assert tree.children == ()
    assert tree.kind is FileType.DIRECTORY


def test_prune_is_idempotent():
    tree = directory(
        "r",
        directory("r/a", directory("r/a/b"), directory("r/a/c", leaf("r/a/c/x"))),
        directory("r/d"),
    )
    prune_tree(tree)
    once = snapshot(tree)
    prune_tree(tree)
    assert snapshot(tree) == once
    assert once == [
        (Path("r"), FileType.DIRECTORY, 0),
        (Path("r/a"), FileType.DIRECTORY, 1),
        (Path("r/a/c"), FileType.DIRECTORY, 2),
        (Path("r/a/c/x"), FileType.FILE, 3),
    ]


def test_prune_after_build(tmp_path):
    """A root holding src/main.ext and an empty build/ keeps only src after pruning."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.ext").write_text("")
    (tmp_path / "build").mkdir()

    tree = build_tree(tmp_path, SearchOptions())
    sort_tree(tree)
    assert names(tree) == ["build", "src"]

    prune_tree(tree)
    assert [node.name for node in PreOrderIter(tree)] == [tmp_path.name, "src", "main.ext"]


def test_count_nodes():
    tree = directory(
        "r",
        directory("r/a", leaf("r/a/x"), leaf("r/a/run", FileType.EXECUTABLE)),
        directory("r/b"),
        leaf("r/l", FileType.SYMLINK),
        leaf("r/top"),
    )
    assert count_nodes(tree) == TreeCounts(directories=2, files=3, symlinks=1)


def test_count_nodes_of_a_bare_root():
    assert count_nodes(directory("r")) == TreeCounts(0, 0, 0)


def test_prune_detaches_removed_directories():
    empty = directory("r/empty")
    tree = directory("r", empty, leaf("r/top"))
    prune_tree(tree)
    assert empty.parent is None
    assert names(tree) == ["top"]


def test_sort_tree_keeps_parent_links(unsorted_tree):
    sort_tree(unsorted_tree)
    for node in PreOrderIter(unsorted_tree):
        for child in node.children:
            assert child.parent is node
