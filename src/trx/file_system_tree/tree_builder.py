"""Filtering-aware construction of DirNode trees.

This module provides the TreeBuilder class, which scans a directory depth-first
and decides for every entry whether it is kept, whether a directory is expanded,
and how symlinks are treated. The decision for each entry runs in a fixed,
short-circuiting order:

1. hidden entries are dropped unless show_hidden is set
2. entries matching a negative pattern or an inherited ignore rule are dropped,
   unless an ignore-file reinclude rule also matches
3. symlinks are either followed or kept as terminal link nodes
4. the depth budget decides whether a directory's contents are listed
5. directories are expanded with the composed ignore rules
6. leaves must match a positive pattern when any are given
"""

import logging
import os
import stat
from pathlib import Path
from threading import Event
from typing import Iterator, List, NamedTuple, Optional, Set, Tuple, Union

from trx.exceptions import ScanCancelled
from trx.exclusion_rules.git_rules import IgnoreRuleSet
from trx.exclusion_rules.glob_pattern import match_any, to_match_path
from trx.file_system_tree.dir_node import DirNode
from trx.file_system_tree.file_identifier import FileIdentifier
from trx.file_system_tree.file_type import classify_leaf, is_read_only
from trx.file_system_tree.permission_action import PermissionAction
from trx.file_system_tree.search_options import SearchOptions
from trx.types import FileType, PathType

logger = logging.getLogger(__name__)


class SkippedEntry(NamedTuple):
    """An entry left out of the tree because it could not be read."""

    path: str
    reason: str


class _Expansion(NamedTuple):
    """A directory whose remaining entries still have to be listed."""

    node: DirNode
    options: SearchOptions
    names: Iterator[str]
    file_id: FileIdentifier


class TreeBuilder:
    """Builds a filtered tree representation of a directory.

    The tree is built lazily on first access and can be rebuilt with refresh().
    Entries that cannot be read (permission errors, entries that vanish during
    the scan) are skipped and recorded in skipped; they never abort the scan.

    Symbolic Link Behavior:
        By default symlinks become SYMLINK leaves carrying their raw target. With
        follow_symlinks, a symlink takes the kind of its target and symlinked
        directories are expanded, except when stay_on_fs is set and the target is
        on a different device than the root, or when the target directory is
        already being expanded higher up (a symlink loop).

    Attributes:
        root_path (Path): The directory (or file) to scan.
        options (SearchOptions): Filters and limits applied during the scan.
        permission_action (PermissionAction): How skipped entries are logged.
        cancel_event (Optional[Event]): When set, the scan stops between siblings.
        skipped (List[SkippedEntry]): Entries skipped during the last build.

    Example:
        >>> builder = TreeBuilder(".", SearchOptions(max_depth=1))  # doctest: +SKIP
        >>> root = builder.get_tree()  # doctest: +SKIP
        >>> [child.name for child in root.children]  # doctest: +SKIP
        ['README.md', 'src', 'tests']
    """

    def __init__(
        self,
        root_path: PathType,
        options: Optional[SearchOptions] = None,
        permission_action: PermissionAction = PermissionAction.IGNORE,
        cancel_event: Optional[Event] = None,
    ) -> None:
        """Initialize a TreeBuilder.

        Args:
            root_path: Path to scan. Can be any path-like object.
            options: Search options. Defaults to SearchOptions().
            permission_action: How to report unreadable entries. Defaults to IGNORE.
            cancel_event: Optional event checked between sibling entries.
        """
        self.root_path = Path(root_path)
        self.options = options if options is not None else SearchOptions()
        self.permission_action = permission_action
        self.cancel_event = cancel_event
        self.skipped: List[SkippedEntry] = []
        self._tree: Optional[DirNode] = None
        self._root_device: Optional[int] = None

    def get_tree(self) -> DirNode:
        """Get the root node of the tree, building it on first access.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            PermissionError: If the root directory cannot be listed.
            ScanCancelled: If the cancel event is set during the scan.
        """
        if self._tree is None:
            self._tree = self.build()
        return self._tree

    def refresh(self) -> DirNode:
        """Discard the cached tree and scan the filesystem again."""
        self._tree = None
        return self.get_tree()

    def build(self) -> DirNode:
        """Scan the root path and return a freshly built tree.

        The root itself is exempt from the hidden, exclusion and positive-pattern
        tests, and a symlinked root is always resolved. Directories are expanded
        from an explicit stack, so the depth of the tree is not bounded by the
        interpreter's recursion limit.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            PermissionError: If the root directory cannot be listed.
            ScanCancelled: If the cancel event is set during the scan.
        """
        self.skipped = []
        if not self.root_path.exists():
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")

        root_stat = self.root_path.stat()
        self._root_device = root_stat.st_dev

        if not stat.S_ISDIR(root_stat.st_mode):
            return DirNode(self.root_path, classify_leaf(self.root_path, root_stat), read_only=is_read_only(root_stat))

        names = self._list_directory(self.root_path, self.options) if self.options.can_expand() else []
        root, expansion = self._open_directory(self.root_path, root_stat, self.options, names)
        if expansion is not None:
            self._expand(expansion)
        return root

    def _expand(self, first: _Expansion) -> None:
        """Fill in the children of a directory and of every directory below it.

        The walk is depth-first and attaches children in listing order. The ids
        of the directories currently on the stack are the ancestors used for
        symlink loop detection.
        """
        stack = [first]
        ancestors: Set[FileIdentifier] = {first.file_id}
        while stack:
            frame = stack[-1]
            name = next(frame.names, None)
            if name is None:
                stack.pop()
                ancestors.discard(frame.file_id)
                continue

            self._check_cancelled(frame.node.path)
            created = self._create_node(frame.node.path / name, frame.options, ancestors)
            if created is None:
                continue
            child, expansion = created
            child.parent = frame.node
            if expansion is not None:
                stack.append(expansion)
                ancestors.add(expansion.file_id)

    def _create_node(
        self, path: Path, options: SearchOptions, ancestors: Set[FileIdentifier]
    ) -> Optional[Tuple[DirNode, Optional[_Expansion]]]:
        """Run the decision pipeline for one entry below the root.

        Returns:
            The node for the entry, paired with the pending expansion when it is
            a directory with entries to list, or None if the entry is excluded or
            skipped.
        """
        if not options.show_hidden and path.name.startswith("."):
            return None

        try:
            entry_stat = path.lstat()
        except OSError as e:
            self._skip(path, e)
            return None

        link_target: Optional[str] = None
        target_stat: Optional[os.stat_result] = entry_stat
        if stat.S_ISLNK(entry_stat.st_mode):
            try:
                link_target = os.readlink(path)
            except OSError:
                # An unreadable link is treated like any other entry
                link_target = None
            try:
                target_stat = path.stat()
            except OSError as e:
                if link_target is None:
                    self._skip(path, e)
                    return None
                target_stat = None

        is_dir = target_stat is not None and stat.S_ISDIR(target_stat.st_mode)

        if self._is_excluded(path, is_dir, options):
            return None

        if link_target is not None and not self._should_follow(path, target_stat, options, ancestors):
            link = DirNode(
                path,
                FileType.SYMLINK,
                read_only=is_read_only(target_stat or entry_stat),
                symlink_target=link_target,
            )
            return link, None

        if target_stat is None:
            # Links without a readable target are never followed
            self._skip(path, "target does not exist")
            return None

        if is_dir:
            try:
                names = self._list_directory(path, options) if options.can_expand() else []
            except OSError as e:
                self._skip(path, e)
                return None
            return self._open_directory(path, target_stat, options, names)

        if options.positive_patterns and not match_any(options.positive_patterns, self._match_path(path, False)):
            return None

        return DirNode(path, classify_leaf(path, target_stat), read_only=is_read_only(target_stat)), None

    def _open_directory(
        self,
        path: Path,
        dir_stat: os.stat_result,
        options: SearchOptions,
        names: List[str],
    ) -> Tuple[DirNode, Optional[_Expansion]]:
        """Create a directory node and, if it has entries, the expansion that lists them."""
        node = DirNode(path, FileType.DIRECTORY, read_only=is_read_only(dir_stat))
        if not names:
            return node, None

        if options.use_ignore_files:
            own_rules = IgnoreRuleSet.in_dir_or_empty(path, case_insensitive=options.case_insensitive)
        else:
            own_rules = IgnoreRuleSet()
        child_options = options.for_child(own_rules.compose(options.ignore_rules))

        return node, _Expansion(node, child_options, iter(names), FileIdentifier.from_stat(dir_stat))

    def _list_directory(self, path: Path, options: SearchOptions) -> List[str]:
        """List the entry names of a directory, keeping only directories with dirs_only.

        Raises:
            OSError: If the directory cannot be listed.
        """
        names = sorted(os.listdir(path))
        if options.dirs_only:
            names = [name for name in names if os.path.isdir(path / name)]
        return names

    def _is_excluded(self, path: Path, is_dir: bool, options: SearchOptions) -> bool:
        """Apply negative patterns and inherited ignore rules to an entry."""
        rules = options.ignore_rules
        if not (match_any(options.negative_patterns, self._match_path(path, is_dir)) or rules.excludes(path, is_dir)):
            return False
        return not rules.reincludes(path, is_dir)

    def _should_follow(
        self,
        path: Path,
        target_stat: Optional[os.stat_result],
        options: SearchOptions,
        ancestors: Set[FileIdentifier],
    ) -> bool:
        """Decide whether a symlink is followed or kept as a link node."""
        if not options.follow_symlinks or target_stat is None:
            return False
        if options.stay_on_fs and target_stat.st_dev != self._root_device:
            logger.debug("Not following %s: target is on another filesystem", path)
            return False
        if stat.S_ISDIR(target_stat.st_mode) and FileIdentifier.from_stat(target_stat) in ancestors:
            logger.debug("Not following %s: symlink loop detected", path)
            return False
        return True

    def _match_path(self, path: Path, is_dir: bool) -> str:
        return to_match_path(path.relative_to(self.root_path), is_dir)

    def _check_cancelled(self, path: Path) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise ScanCancelled(str(path))

    def _skip(self, path: Path, error: Union[OSError, str]) -> None:
        """Record an unreadable entry and report it according to permission_action."""
        if isinstance(error, OSError):
            reason = error.strerror or str(error)
        else:
            reason = error
        self.skipped.append(SkippedEntry(str(path), reason))
        if self.permission_action == PermissionAction.WARN:
            logger.warning("Skipping %s: %s", path, reason)
        else:
            logger.debug("Skipping %s: %s", path, reason)


def build_tree(
    root_path: PathType,
    options: Optional[SearchOptions] = None,
    permission_action: PermissionAction = PermissionAction.IGNORE,
    cancel_event: Optional[Event] = None,
) -> DirNode:
    """Scan a directory and return its filtered tree.

    This is a shortcut for TreeBuilder(...).build() when the skipped entries are
    not needed.
    """
    return TreeBuilder(root_path, options, permission_action, cancel_event).build()
