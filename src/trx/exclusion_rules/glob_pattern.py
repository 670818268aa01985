"""Glob pattern compilation and matching using .gitignore wildmatch syntax."""

import re
from pathlib import PurePath
from typing import Any, Iterable, Sequence, Tuple

from pathspec.pattern import RegexPattern
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from trx.exceptions import PatternError

# Tails pathspec appends so that a pattern also matches everything below what it names
_SUBPATH_TAIL = "(?:(?P<ps_d>/).*)?$"
_DIR_SUBPATH_TAIL = "(?P<ps_d>/).*$"


class GlobPattern:
    """A compiled glob pattern with optional case folding.

    Patterns follow the .gitignore wildmatch syntax implemented by the pathspec
    library:
    - ``*`` matches any run of characters except the path separator
    - ``**`` matches any run of characters including separators
    - ``?`` matches a single character
    - ``[abc]``, ``[a-z]`` and ``[!abc]`` are character classes; a ``[`` that is
      never closed is an error
    - a pattern without a slash matches the final component at any depth
    - a pattern with a leading or inner slash is anchored to its base directory
    - a trailing slash only matches directories

    By default a pattern matches the path it names and nothing below it, so
    ``docs`` matches ``docs`` and ``docs/`` but not ``docs/guide.md``. Ignore-file
    rules pass match_subpaths=True to get the .gitignore behavior where a rule
    naming a directory also covers its contents; ``a/**`` always does.

    Paths handed to match() are POSIX-style strings relative to the directory the
    pattern is rooted at. Directories are passed with a trailing slash (see
    to_match_path()).

    Attributes:
        text (str): The pattern as written.
        case_insensitive (bool): Whether matching ignores case.
        match_subpaths (bool): Whether paths below a matched directory match too.

    Example:
        >>> pattern = GlobPattern("*.txt")
        >>> pattern.match("notes.txt")
        True
        >>> pattern.match("docs/notes.txt")
        True
        >>> pattern.match("notes.TXT")
        False
        >>> GlobPattern("*.txt", case_insensitive=True).match("notes.TXT")
        True
        >>> GlobPattern("docs").match("docs/guide.md")
        False
        >>> GlobPattern("docs", match_subpaths=True).match("docs/guide.md")
        True
    """

    def __init__(self, text: str, case_insensitive: bool = False, match_subpaths: bool = False) -> None:
        """Compile a glob pattern.

        Args:
            text: The pattern to compile.
            case_insensitive: Whether matching should ignore case. Defaults to False.
            match_subpaths: Whether paths below a matched directory also match.
                Defaults to False.

        Raises:
            PatternError: If the pattern is malformed, empty, a comment, or negated.
        """
        self.text = text
        self.case_insensitive = case_insensitive
        self.match_subpaths = match_subpaths

        try:
            regex, include = GitWildMatchPattern.pattern_to_regex(text)
        except ValueError as e:
            raise PatternError(text, str(e)) from e

        if include is None:
            raise PatternError(text, "pattern matches nothing")
        if not include:
            raise PatternError(text, "negated patterns are only supported in ignore files")
        _check_brackets(text)

        if not match_subpaths:
            regex = _strip_subpath_tail(regex)

        flags = re.IGNORECASE if case_insensitive else 0
        try:
            compiled = re.compile(regex, flags)
        except re.error as e:
            raise PatternError(text, str(e)) from e

        self._regex_pattern = RegexPattern(compiled, include=True)

    def match(self, path: str) -> bool:
        """Check whether a relative POSIX path matches this pattern.

        Args:
            path: Path relative to the pattern's base directory.

        Returns:
            bool: True if the path matches.
        """
        return self._regex_pattern.match_file(path) is not None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, GlobPattern):
            return NotImplemented
        return (self.text, self.case_insensitive, self.match_subpaths) == (
            other.text,
            other.case_insensitive,
            other.match_subpaths,
        )

    def __hash__(self) -> int:
        return hash((self.text, self.case_insensitive, self.match_subpaths))

    def __repr__(self) -> str:
        return (
            f"GlobPattern({self.text!r}, case_insensitive={self.case_insensitive}, "
            f"match_subpaths={self.match_subpaths})"
        )


def _strip_subpath_tail(regex: str) -> str:
    """Make a wildmatch regex stop at the path it names.

    A trailing-slash pattern keeps matching the directory itself (``docs/``).
    """
    if regex.endswith(_SUBPATH_TAIL):
        return regex[: -len(_SUBPATH_TAIL)] + "/?$"
    if regex.endswith(_DIR_SUBPATH_TAIL):
        return regex[: -len(_DIR_SUBPATH_TAIL)] + "/$"
    return regex


def _check_brackets(text: str) -> None:
    """Reject a ``[`` that opens a character class which is never closed.

    Classes end within their path segment. A leading ``!`` or ``^`` and a ``]``
    right after it belong to the class, and ``\\[`` is a literal bracket.

    Raises:
        PatternError: If a character class is left open.
    """
    for segment in text.split("/"):
        i, end = 0, len(segment)
        while i < end:
            char = segment[i]
            i += 1
            if char == "\\":
                i += 1
            elif char == "[":
                j = i
                if j < end and segment[j] in "!^":
                    j += 1
                if j < end and segment[j] == "]":
                    j += 1
                while j < end and segment[j] != "]":
                    j += 1
                if j >= end:
                    raise PatternError(text, "unclosed character class")
                i = j + 1


def compile_pattern(text: str, case_insensitive: bool = False) -> GlobPattern:
    """Compile a single glob pattern.

    Args:
        text: The pattern to compile.
        case_insensitive: Whether matching should ignore case.

    Returns:
        GlobPattern: The compiled pattern.

    Raises:
        PatternError: If the pattern cannot be compiled.
    """
    return GlobPattern(text, case_insensitive=case_insensitive)


def compile_patterns(texts: Iterable[str], case_insensitive: bool = False) -> Tuple[GlobPattern, ...]:
    """Compile several glob patterns, preserving their order.

    Example:
        >>> [p.text for p in compile_patterns(["*.py", "docs/"])]
        ['*.py', 'docs/']
    """
    return tuple(GlobPattern(text, case_insensitive=case_insensitive) for text in texts)


def matches(pattern: str, path: str, case_insensitive: bool = False) -> bool:
    """Compile a pattern and match it against a path in one step.

    Example:
        >>> matches("src/**/*.py", "src/pkg/mod.py")
        True
        >>> matches("src/*.py", "src/pkg/mod.py")
        False
    """
    return GlobPattern(pattern, case_insensitive=case_insensitive).match(path)


def match_any(patterns: Sequence[GlobPattern], path: str) -> bool:
    """Return True if any of the patterns matches the path."""
    return any(pattern.match(path) for pattern in patterns)


def to_match_path(relative_path: PurePath, is_dir: bool) -> str:
    """Convert a relative path into the string form used for matching.

    Separators are normalized to forward slashes and directories get a trailing
    slash so that directory-only patterns such as ``build/`` apply to them.

    Example:
        >>> to_match_path(PurePath("src") / "app", is_dir=True)
        'src/app/'
        >>> to_match_path(PurePath("src") / "app.py", is_dir=False)
        'src/app.py'
    """
    text = relative_path.as_posix()
    if text == ".":
        text = ""
    if is_dir and text:
        text += "/"
    return text
