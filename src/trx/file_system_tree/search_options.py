"""Search configuration for the tree builder."""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from trx.exclusion_rules.git_rules import IgnoreRuleSet
from trx.exclusion_rules.glob_pattern import GlobPattern


@dataclass(frozen=True)
class SearchOptions:
    """Options deciding which entries a scan keeps and how far it goes.

    All fields are independent. ignore_rules holds the ignore rules inherited
    from the ancestors of the directory being scanned; the builder never
    changes it in place but hands each child scan a copy made with
    for_child().

    Attributes:
        show_hidden (bool): Keep entries whose name starts with a dot.
        dirs_only (bool): Only list directories.
        follow_symlinks (bool): Descend into symlinked directories.
        stay_on_fs (bool): Only follow symlinks whose target is on the scan root's device.
        max_depth (Optional[int]): How many levels to expand below the root; None means unlimited.
        use_ignore_files (bool): Read .gitignore files while scanning.
        positive_patterns (Tuple[GlobPattern, ...]): When non-empty, leaves must match one of them.
        negative_patterns (Tuple[GlobPattern, ...]): Entries matching any of them are excluded.
        case_insensitive (bool): Compile ignore-file patterns without case sensitivity.
        ignore_rules (IgnoreRuleSet): Ignore rules inherited from ancestor directories.

    Example:
        >>> options = SearchOptions(max_depth=2)
        >>> options.for_child(IgnoreRuleSet()).max_depth
        1
        >>> SearchOptions().for_child(IgnoreRuleSet()).max_depth is None
        True
    """

    show_hidden: bool = False
    dirs_only: bool = False
    follow_symlinks: bool = False
    stay_on_fs: bool = False
    max_depth: Optional[int] = None
    use_ignore_files: bool = False
    positive_patterns: Tuple[GlobPattern, ...] = ()
    negative_patterns: Tuple[GlobPattern, ...] = ()
    case_insensitive: bool = False
    ignore_rules: IgnoreRuleSet = IgnoreRuleSet()

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be None or a non-negative integer, got {self.max_depth}")

    def can_expand(self) -> bool:
        """Return True if the depth budget allows listing a directory's contents."""
        return self.max_depth is None or self.max_depth > 0

    def for_child(self, ignore_rules: IgnoreRuleSet) -> "SearchOptions":
        """Return the options for the entries of a directory being expanded."""
        child_depth = None if self.max_depth is None else self.max_depth - 1
        return replace(self, max_depth=child_depth, ignore_rules=ignore_rules)
