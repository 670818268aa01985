"""Glob patterns and cascading ignore-file rules for filtering tree entries."""

from .git_rules import IGNORE_FILE_NAME, AnchoredPattern, IgnoreRuleSet
from .glob_pattern import GlobPattern, compile_pattern, compile_patterns, match_any, matches, to_match_path

__all__ = [
    "IGNORE_FILE_NAME",
    "AnchoredPattern",
    "GlobPattern",
    "IgnoreRuleSet",
    "compile_pattern",
    "compile_patterns",
    "match_any",
    "matches",
    "to_match_path",
]
