"""
memrepo Core: Path Utilities.

Helpers for canonical repository paths. Repository paths always use "/" as
separator, never end with a separator (except the root "/"), and contain no
"." or ".." segments.

Example:
    >>> canonicalize("/css/../js//app.js")
    '/js/app.js'
    >>> get_directory("/js/app.js")
    '/js'
"""
from typing import List

from memrepo.core.constants import ROOT_PATH, SEPARATOR


def canonicalize(path: str) -> str:
    """Return the canonical form of a path.

    Backslashes become slashes, duplicate separators and "." segments are
    dropped and ".." segments are resolved. ".." segments above the root of
    an absolute path are discarded.

    Args:
        path: Path to canonicalize

    Returns:
        Canonical path
    """
    path = path.replace("\\", SEPARATOR)
    absolute = path.startswith(SEPARATOR)

    parts: List[str] = []
    for segment in path.split(SEPARATOR):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not absolute:
                parts.append(segment)
            continue
        parts.append(segment)

    canonical = SEPARATOR.join(parts)
    if absolute:
        return SEPARATOR + canonical
    return canonical or "."


def get_directory(path: str) -> str:
    """Return the parent directory of a canonical path.

    The parent of the root is the root itself.
    """
    if path == ROOT_PATH:
        return ROOT_PATH

    head, _, _ = path.rpartition(SEPARATOR)
    if not head:
        return ROOT_PATH if path.startswith(SEPARATOR) else ""
    return head


def get_filename(path: str) -> str:
    """Return the last segment of a canonical path ("" for the root)."""
    return path.rpartition(SEPARATOR)[2]


def join(base: str, name: str) -> str:
    """Append a name to a canonical directory path."""
    if base.endswith(SEPARATOR):
        return base + name
    return base + SEPARATOR + name


def is_base_path(base: str, path: str) -> bool:
    """Check whether path equals base or lies below it.

    Args:
        base: Canonical directory path
        path: Canonical path to test

    Returns:
        True if path is base or one of its descendants
    """
    if path == base:
        return True
    return path.startswith(base if base.endswith(SEPARATOR) else base + SEPARATOR)


def get_ancestors(path: str) -> List[str]:
    """Return the ancestors of a canonical absolute path, nearest first.

    Example:
        >>> get_ancestors("/a/b/c")
        ['/a/b', '/a', '/']
    """
    ancestors = []
    while path != ROOT_PATH:
        path = get_directory(path)
        ancestors.append(path)
    return ancestors
