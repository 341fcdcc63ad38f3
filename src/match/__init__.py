"""Pattern matching for rule selectors."""

from match.patterns import glob_to_regex, matches, matches_all, matches_any

__all__ = [
    "glob_to_regex",
    "matches",
    "matches_all",
    "matches_any",
]
