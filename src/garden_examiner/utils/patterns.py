"""Glob-style name patterns used for wildcard command-line arguments."""

from __future__ import annotations

from fnmatch import fnmatchcase

PATTERN_CHARS: frozenset[str] = frozenset("*?[")


def is_pattern(name: str) -> bool:
    """Whether *name* contains glob metacharacters."""
    return any(char in PATTERN_CHARS for char in name)


def match_pattern(name: str, pattern: str) -> bool:
    """Case-sensitive glob match of *name* against *pattern*.

    A plain name without metacharacters matches only itself.
    """
    return fnmatchcase(name, pattern)
