"""Cascading .gitignore rules rooted at the directory that declares them."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from trx.exceptions import PatternError
from trx.types import PathType

from .glob_pattern import GlobPattern, to_match_path

logger = logging.getLogger(__name__)

IGNORE_FILE_NAME = ".gitignore"


@dataclass(frozen=True)
class AnchoredPattern:
    """A glob pattern rooted at the directory of the ignore file it came from.

    Paths outside the base directory never match. Inside it, the path is made
    relative to the base directory before matching, so ``/build`` in
    ``project/.gitignore`` only matches ``project/build`` while ``*.log`` matches
    log files anywhere below ``project``.

    Attributes:
        base_dir (Path): Directory containing the ignore file.
        pattern (GlobPattern): The compiled pattern.

    Example:
        >>> from pathlib import Path
        >>> rule = AnchoredPattern(Path("project"), GlobPattern("/build"))
        >>> rule.matches(Path("project/build"), is_dir=True)
        True
        >>> rule.matches(Path("project/src/build"), is_dir=True)
        False
        >>> rule.matches(Path("elsewhere/build"), is_dir=True)
        False
    """

    base_dir: Path
    pattern: GlobPattern

    def matches(self, path: Path, is_dir: bool) -> bool:
        try:
            relative = path.relative_to(self.base_dir)
        except ValueError:
            return False
        match_path = to_match_path(relative, is_dir)
        if not match_path:
            return False
        return self.pattern.match(match_path)


@dataclass(frozen=True)
class IgnoreRuleSet:
    """Exclude and reinclude patterns accumulated from a chain of ignore files.

    A rule set is immutable. Each directory's own rules are parsed with
    in_dir_or_empty() and composed with the set inherited from its parent; the
    composed copy is what the directory hands to its children, so rules
    accumulate monotonically down the tree and a parent never sees the rules of
    its children.

    A path is excluded when it matches any exclude pattern and no reinclude
    pattern. This is a whole-set test rather than last-match-wins.

    Attributes:
        exclude (Tuple[AnchoredPattern, ...]): Patterns that hide matching paths.
        reinclude (Tuple[AnchoredPattern, ...]): Patterns that restore hidden paths.

    Example:
        >>> import os
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     with open(os.path.join(tmpdir, ".gitignore"), "w") as f:
        ...         _ = f.write("*.log\\n!keep.log\\n")
        ...     rules = IgnoreRuleSet.in_dir_or_empty(tmpdir)
        ...     excluded = rules.is_excluded(Path(tmpdir) / "a.log", is_dir=False)
        ...     kept = rules.is_excluded(Path(tmpdir) / "keep.log", is_dir=False)
        >>> excluded, kept
        (True, False)
    """

    exclude: Tuple[AnchoredPattern, ...] = ()
    reinclude: Tuple[AnchoredPattern, ...] = ()

    @classmethod
    def parse(cls, ignore_file: PathType, case_insensitive: bool = False) -> "IgnoreRuleSet":
        """Parse an ignore file into a rule set rooted at the file's directory.

        Each line is handled as follows:
        - blank lines and lines starting with ``#`` are skipped
        - a leading ``/`` anchors the pattern to the ignore file's directory
        - a leading ``!`` turns the pattern into a reinclude pattern
        - ``\\#`` and ``\\!`` stand for a literal ``#`` or ``!`` in an exclude pattern

        Args:
            ignore_file: Path to the ignore file.
            case_insensitive: Whether patterns should ignore case.

        Returns:
            IgnoreRuleSet: The parsed rules.

        Raises:
            OSError: If the file cannot be read.
            PatternError: If any line holds a malformed pattern.
        """
        path = Path(ignore_file)
        base_dir = path.parent
        exclude: List[AnchoredPattern] = []
        reinclude: List[AnchoredPattern] = []

        with open(path, "r", encoding="utf-8", errors="replace") as f:
            lines = f.read().splitlines()

        for line in lines:
            glob = _line_to_glob(line)
            if glob is None:
                continue
            text, is_reinclude = glob
            glob_pattern = GlobPattern(text, case_insensitive=case_insensitive, match_subpaths=True)
            anchored = AnchoredPattern(base_dir, glob_pattern)
            if is_reinclude:
                reinclude.append(anchored)
            else:
                exclude.append(anchored)

        return cls(exclude=tuple(exclude), reinclude=tuple(reinclude))

    @classmethod
    def in_dir_or_empty(cls, directory: PathType, case_insensitive: bool = False) -> "IgnoreRuleSet":
        """Load the ignore file of a directory, or an empty set if there is none.

        A missing, unreadable or malformed ignore file is equivalent to having
        no additional rules for the directory; the problem is only logged.

        Args:
            directory: Directory that may contain an ignore file.
            case_insensitive: Whether patterns should ignore case.

        Returns:
            IgnoreRuleSet: The directory's own rules (not yet composed).
        """
        ignore_file = Path(directory) / IGNORE_FILE_NAME
        if not ignore_file.is_file():
            return cls()
        try:
            return cls.parse(ignore_file, case_insensitive=case_insensitive)
        except (OSError, PatternError) as e:
            logger.debug("Ignoring unusable ignore file %s: %s", ignore_file, e)
            return cls()

    def compose(self, inherited: "IgnoreRuleSet") -> "IgnoreRuleSet":
        """Return a new set holding these rules followed by the inherited ones."""
        return IgnoreRuleSet(
            exclude=self.exclude + inherited.exclude,
            reinclude=self.reinclude + inherited.reinclude,
        )

    def is_excluded(self, path: Path, is_dir: bool) -> bool:
        """Check whether a path is excluded by this rule set alone."""
        return self.excludes(path, is_dir) and not self.reincludes(path, is_dir)

    def excludes(self, path: Path, is_dir: bool) -> bool:
        """Return True if any exclude pattern matches the path."""
        return any(rule.matches(path, is_dir) for rule in self.exclude)

    def reincludes(self, path: Path, is_dir: bool) -> bool:
        """Return True if any reinclude pattern matches the path."""
        return any(rule.matches(path, is_dir) for rule in self.reinclude)

    def is_empty(self) -> bool:
        return not self.exclude and not self.reinclude


def _line_to_glob(line: str) -> Optional[Tuple[str, bool]]:
    """Translate one ignore-file line into glob text and a reinclude flag.

    Returns None for blank and comment lines. The anchoring slash is kept on the
    glob text because the wildmatch compiler anchors patterns that start with
    one. Escaped ``\\#`` and ``\\!`` are left escaped; the compiler reads them as
    literal characters.
    """
    text = line.strip()
    if not text or text.startswith("#"):
        return None

    anchored = False
    if text.startswith("/"):
        anchored, text = True, text[1:]

    is_reinclude = False
    if text.startswith("!"):
        is_reinclude, text = True, text[1:]
        if text.startswith("/"):
            anchored, text = True, text[1:]

    if not text:
        return None
    if not anchored and text[0] in "#!":
        text = "\\" + text

    return ("/" + text if anchored else text), is_reinclude
