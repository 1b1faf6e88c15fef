"""Glob matching of step names."""

from __future__ import annotations

from fnmatch import fnmatchcase


def matches(name: str | None, pattern: str) -> bool:
    """Return True when `name` matches the shell-style `pattern`.

    Matching is case sensitive. Unnamed steps never match.
    """

    if not name:
        return False
    return fnmatchcase(name, pattern)
