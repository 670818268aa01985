"""Directory tree listing: scan, sort, prune and render in one object.

This module provides the Trx class, which ties the tree builder, the tree
transforms and the output strategies together the way the command-line
interface uses them.
"""

from pathlib import Path
from threading import Event
from typing import Dict, List, Optional, Union

from trx.file_system_tree.dir_node import DirNode
from trx.file_system_tree.permission_action import PermissionAction
from trx.file_system_tree.search_options import SearchOptions
from trx.file_system_tree.tree_builder import SkippedEntry, TreeBuilder
from trx.file_system_tree.tree_mutator import TreeCounts, count_nodes, prune_tree, sort_tree
from trx.output_strategies.base_strategy import TreeOutputStrategy
from trx.output_strategies.format_options import FormatOptions
from trx.output_strategies.html_strategy import HTMLOutputStrategy
from trx.output_strategies.json_strategy import JSONOutputStrategy
from trx.output_strategies.text_strategy import TextOutputStrategy
from trx.types import FileType, PathType

OUTPUT_FORMATS = ("text", "json", "html")


def get_output_strategy(output_format: str) -> TreeOutputStrategy:
    """Return the output strategy for a format name.

    Raises:
        ValueError: If the format is not one of OUTPUT_FORMATS.
    """
    strategies: Dict[str, TreeOutputStrategy] = {
        "text": TextOutputStrategy(),
        "json": JSONOutputStrategy(),
        "html": HTMLOutputStrategy(),
    }
    try:
        return strategies[output_format]
    except KeyError:
        raise ValueError(f"Unsupported output format: {output_format}")


class Trx:
    """A scanned, sorted and optionally pruned directory tree ready for rendering.

    The tree is built during initialization: children are always sorted by path
    and, when prune is set, directories without any remaining content are
    removed. Counts are taken after these transforms.

    Attributes:
        directory (Path): The scanned root path.
        search_options (SearchOptions): Filters applied while scanning.
        format_options (FormatOptions): Options passed to the output strategy.
        tree (DirNode): The resulting tree.
        skipped (List[SkippedEntry]): Entries left out because they could not be read.

    Example:
        >>> listing = Trx("src", search_options=SearchOptions(max_depth=1))  # doctest: +SKIP
        >>> print(listing.render(), end="")  # doctest: +SKIP
        src
        └── trx
        >>> listing.directory_count  # doctest: +SKIP
        1

    Raises:
        FileNotFoundError: If the directory does not exist.
        PermissionError: If the root directory cannot be listed.
        ValueError: If the output format or permission action is unsupported.
        ScanCancelled: If cancel_event is set while scanning.
    """

    def __init__(
        self,
        directory: PathType,
        *,
        search_options: Optional[SearchOptions] = None,
        format_options: Optional[FormatOptions] = None,
        output_format: str = "text",
        prune: bool = False,
        permission_action: Union[str, PermissionAction] = PermissionAction.IGNORE,
        cancel_event: Optional[Event] = None,
    ) -> None:
        """Scan a directory and prepare its tree.

        Args:
            directory: Directory to scan. Can be any path-like object.
            search_options: Filters and limits for the scan. Defaults to SearchOptions().
            format_options: Rendering options. Defaults to FormatOptions().
            output_format: One of 'text', 'json' or 'html'. Defaults to 'text'.
            prune: Remove directories that end up without content.
            permission_action: How to report unreadable entries, either "ignore" or
                "warn", or a PermissionAction value. Defaults to "ignore".
            cancel_event: Optional event that interrupts the scan when set.
        """
        self.directory = Path(directory)
        self.search_options = search_options if search_options is not None else SearchOptions()
        self.format_options = format_options if format_options is not None else FormatOptions()
        self._strategy = get_output_strategy(output_format)

        if isinstance(permission_action, str):
            try:
                permission_action = PermissionAction(permission_action.lower())
            except ValueError:
                raise ValueError(
                    f"Invalid permission_action: {permission_action}. " "Must be one of: 'ignore', 'warn'"
                )

        builder = TreeBuilder(self.directory, self.search_options, permission_action, cancel_event)
        self.tree: DirNode = builder.build()
        self.skipped: List[SkippedEntry] = builder.skipped

        sort_tree(self.tree)
        if prune:
            prune_tree(self.tree)

        self._counts: TreeCounts = count_nodes(self.tree)

    @property
    def directory_count(self) -> int:
        """Number of directories in the tree, not counting the root."""
        return self._counts.directories

    @property
    def file_count(self) -> int:
        """Number of files (including executables) in the tree."""
        return self._counts.files

    @property
    def symlink_count(self) -> int:
        """Number of unfollowed symlinks in the tree."""
        return self._counts.symlinks

    @property
    def is_empty(self) -> bool:
        """True when the root is a directory and no entry below it survived filtering.

        A file root is listed on its own and never counts as empty.
        """
        return self.tree.kind is FileType.DIRECTORY and not self.tree.children

    def render(self, format_options: Optional[FormatOptions] = None) -> str:
        """Render the tree with the configured output strategy.

        Args:
            format_options: Options overriding the ones given at initialization.

        Returns:
            str: The rendered tree.
        """
        return self._strategy.render(self.tree, format_options or self.format_options)

    def summary(self) -> str:
        """Return a one-line summary in the style of ``tree``."""
        directories = self.directory_count
        files = self.file_count + self.symlink_count
        return (
            f"{directories} {'directory' if directories == 1 else 'directories'}, "
            f"{files} {'file' if files == 1 else 'files'}"
        )
