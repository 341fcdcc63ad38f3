"""Name patterns used by rules to select packages and classes.

A pattern is interpreted by its syntactic shape:

* ``^...`` or ``...$``: regular expression. Invalid expressions fall back to
  exact string comparison.
* ``prefix..*``: ``prefix`` and everything below it, at any depth.
* ``prefix.*``: direct members of ``prefix`` only.
* anything containing ``*`` or ``?``: glob over dotted names, where ``*`` and
  ``?`` never cross a ``.``.
* anything else: exact match.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

_GLOB_CHARS = frozenset("*?[")

RECURSIVE_SUFFIX = "..*"
SINGLE_LEVEL_SUFFIX = ".*"


def _is_regex(pattern: str) -> bool:
    return pattern.startswith("^") or pattern.endswith("$")


def _has_glob(text: str) -> bool:
    return any(ch in _GLOB_CHARS for ch in text)


def glob_to_regex(pattern: str) -> str:
    """Translate a dotted-name glob into an anchored regular expression.

    Examples:
        >>> glob_to_regex("com.*.User")
        '^com\\\\.[^.]*\\\\.User$'
        >>> glob_to_regex("a?[bc]")
        '^a[^.][bc]$'
    """
    parts: list[str] = ["^"]
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "*":
            parts.append("[^.]*")
        elif ch == "?":
            parts.append("[^.]")
        elif ch == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                parts.append(re.escape(ch))
            else:
                parts.append(pattern[i : end + 1])
                i = end
        else:
            parts.append(re.escape(ch))
        i += 1
    parts.append("$")
    return "".join(parts)


@lru_cache(maxsize=512)
def _compile(expression: str) -> re.Pattern[str] | None:
    try:
        return re.compile(expression)
    except re.error:
        return None


def _match_regex(pattern: str, name: str) -> bool:
    compiled = _compile(pattern)
    if compiled is None:
        return name == pattern
    return compiled.search(name) is not None


def _match_glob(pattern: str, name: str) -> bool:
    compiled = _compile(glob_to_regex(pattern))
    if compiled is None:
        # Bracket expressions are copied verbatim and may still be invalid.
        return name == pattern
    return compiled.match(name) is not None


def matches(pattern: str, name: str) -> bool:
    """Return True when ``name`` is selected by ``pattern``. Never raises."""
    if not isinstance(pattern, str) or not isinstance(name, str):
        return False

    if _is_regex(pattern):
        return _match_regex(pattern, name)

    if pattern.endswith(RECURSIVE_SUFFIX):
        prefix = pattern[: -len(RECURSIVE_SUFFIX)]
        if not _has_glob(prefix):
            return name.startswith(prefix + ".")

    if pattern.endswith(SINGLE_LEVEL_SUFFIX):
        prefix = pattern[: -len(SINGLE_LEVEL_SUFFIX)]
        if not _has_glob(prefix):
            head = prefix + "."
            return name.startswith(head) and "." not in name[len(head) :]

    if "*" in pattern or "?" in pattern:
        return _match_glob(pattern, name)

    return name == pattern


def matches_any(patterns: Iterable[str], name: str) -> bool:
    """Return True when at least one pattern selects ``name``."""
    return any(matches(pattern, name) for pattern in patterns)


def matches_all(patterns: Iterable[str], name: str) -> bool:
    """Return True when every pattern selects ``name``."""
    return all(matches(pattern, name) for pattern in patterns)


__all__ = [
    "RECURSIVE_SUFFIX",
    "SINGLE_LEVEL_SUFFIX",
    "glob_to_regex",
    "matches",
    "matches_all",
    "matches_any",
]
