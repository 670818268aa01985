"""Unit tests for the Trx orchestrator."""

import json
from threading import Event

import pytest

from trx.exceptions import ScanCancelled
from trx.exclusion_rules.git_rules import IGNORE_FILE_NAME
from trx.exclusion_rules.glob_pattern import compile_patterns
from trx.file_system_tree.permission_action import PermissionAction
from trx.file_system_tree.search_options import SearchOptions
from trx.output_strategies.format_options import FormatOptions
from trx.output_strategies.html_strategy import HTMLOutputStrategy
from trx.output_strategies.json_strategy import JSONOutputStrategy
from trx.output_strategies.text_strategy import TextOutputStrategy
from trx.trx import Trx, get_output_strategy


@pytest.fixture
def temp_project(tmp_path):
    """Create a temporary project directory with test files."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.py").write_text("def main(): pass\n")
    (tmp_path / "src" / "utils").mkdir()
    (tmp_path / "src" / "utils" / "helpers.py").write_text("def helper(): pass\n")
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "out.log").write_text("log\n")
    (tmp_path / "README.md").write_text("# Project\n")
    (tmp_path / IGNORE_FILE_NAME).write_text("*.log\n")
    return tmp_path


@pytest.mark.parametrize(
    "name,strategy_type",
    [("text", TextOutputStrategy), ("json", JSONOutputStrategy), ("html", HTMLOutputStrategy)],
)
def test_get_output_strategy(name, strategy_type):
    assert isinstance(get_output_strategy(name), strategy_type)


def test_get_output_strategy_unknown():
    with pytest.raises(ValueError, match="Unsupported output format"):
        get_output_strategy("xml")


def test_render_sorted_tree(temp_project):
    listing = Trx(temp_project)
    assert listing.render() == (
        f"{temp_project.name}\n"
        "├── README.md\n"
        "├── build\n"
        "│   └── out.log\n"
        "└── src\n"
        "    ├── main.py\n"
        "    └── utils\n"
        "        └── helpers.py\n"
    )


def test_counts_and_summary(temp_project):
    listing = Trx(temp_project)
    assert listing.directory_count == 3
    assert listing.file_count == 4
    assert listing.symlink_count == 0
    assert listing.summary() == "3 directories, 4 files"
    assert not listing.is_empty


def test_prune_after_ignore_rules(temp_project):
    options = SearchOptions(use_ignore_files=True)

    unpruned = Trx(temp_project, search_options=options)
    assert [child.name for child in unpruned.tree.children] == ["README.md", "build", "src"]

    pruned = Trx(temp_project, search_options=options, prune=True)
    assert [child.name for child in pruned.tree.children] == ["README.md", "src"]
    assert pruned.summary() == "2 directories, 3 files"


def test_summary_singular(tmp_path):
    (tmp_path / "only").mkdir()
    (tmp_path / "only" / "file.txt").write_text("")
    assert Trx(tmp_path).summary() == "1 directory, 1 file"


def test_empty_result(temp_project):
    options = SearchOptions(positive_patterns=compile_patterns(["*.rs"]))
    listing = Trx(temp_project, search_options=options, prune=True)
    assert listing.is_empty
    assert listing.render() == f"{temp_project.name}\n"


def test_file_root_is_not_empty(temp_project):
    listing = Trx(temp_project / "README.md")
    assert not listing.is_empty
    assert listing.render() == "README.md\n"


def test_render_with_other_format_options(temp_project):
    listing = Trx(temp_project, search_options=SearchOptions(max_depth=1))
    assert listing.render(FormatOptions(indent=False, decorate=True)).splitlines() == [
        f"{temp_project.name}/",
        "README.md",
        "build/",
        "src/",
    ]


def test_json_output(temp_project):
    listing = Trx(temp_project, search_options=SearchOptions(max_depth=1), output_format="json")
    data = json.loads(listing.render())
    assert [child["name"] for child in data["contents"]] == ["README.md", "build", "src"]


def test_invalid_output_format(temp_project):
    with pytest.raises(ValueError):
        Trx(temp_project, output_format="yaml")


@pytest.mark.parametrize("action", ["ignore", "WARN", PermissionAction.WARN])
def test_permission_action_values(temp_project, action):
    assert Trx(temp_project, permission_action=action).skipped == []


def test_invalid_permission_action(temp_project):
    with pytest.raises(ValueError, match="Invalid permission_action"):
        Trx(temp_project, permission_action="fail")


def test_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        Trx(tmp_path / "missing")


def test_cancelled_scan(temp_project):
    cancel = Event()
    cancel.set()
    with pytest.raises(ScanCancelled):
        Trx(temp_project, cancel_event=cancel)
