#!/usr/bin/env python3
r"""Glob-style selectors for repository paths.

A selector is an absolute path that may contain wildcards:
- ``*`` matches any characters except "/"
- ``**`` matches any characters including "/" (``/**/`` also matches "/")
- ``?`` matches one character except "/"
- ``[abc]``, ``[a-z]``, ``[!abc]`` match one character of a class
- ``{css,js}`` matches one of several alternatives

Selectors are matched in two phases. The static prefix (everything before
the first wildcard) rejects paths with a plain string test, and only the
remaining paths are checked against the compiled regular expression.

Example:
    >>> selector = compile_selector("/app/views/*.twig")
    >>> selector.static_prefix
    '/app/views/'
    >>> selector.matches("/app/views/index.twig")
    True
    >>> selector.matches("/app/views/admin/index.twig")
    False
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Pattern

from memrepo.core.constants import WILDCARD_CHARS
from memrepo.core.validators import ValidationError


@dataclass(frozen=True)
class CompiledSelector:
    """A selector split into its static prefix and full-path matcher."""

    selector: str
    static_prefix: str
    pattern: Optional[Pattern[str]] = None

    @property
    def is_dynamic(self) -> bool:
        """True if the selector contains at least one wildcard."""
        return self.pattern is not None

    def matches(self, path: str) -> bool:
        """Check if a canonical path matches this selector.

        Args:
            path: Canonical repository path

        Returns:
            True if path matches
        """
        if self.pattern is None:
            return path == self.selector

        if not path.startswith(self.static_prefix):
            return False

        return self.pattern.fullmatch(path) is not None


def is_selector(string: str) -> bool:
    """Check whether a string contains wildcard characters."""
    return any(char in WILDCARD_CHARS for char in string)


def get_static_prefix(selector: str) -> str:
    """Return the literal part of a selector before the first wildcard.

    Args:
        selector: Selector string

    Returns:
        Static prefix (the whole selector if it has no wildcard)
    """
    for i, char in enumerate(selector):
        if char in WILDCARD_CHARS:
            return selector[:i]
    return selector


def to_regex(selector: str) -> str:
    """Convert a selector to an anchored regular expression.

    Args:
        selector: Selector string

    Returns:
        Regular expression source matching whole paths

    Raises:
        ValidationError: If a character class or alternation is not closed
    """
    return "^" + _translate(selector) + "$"


@lru_cache(maxsize=256)
def compile_selector(selector: str) -> CompiledSelector:
    """Compile a canonical selector.

    Args:
        selector: Canonical selector string

    Returns:
        CompiledSelector with the static prefix and, for dynamic selectors,
        the compiled full-path pattern
    """
    static_prefix = get_static_prefix(selector)

    if len(static_prefix) == len(selector):
        return CompiledSelector(selector=selector, static_prefix=static_prefix)

    try:
        pattern = re.compile(_translate(selector))
    except re.error as e:
        raise ValidationError(f"Invalid selector {selector}: {e}")

    return CompiledSelector(selector=selector, static_prefix=static_prefix, pattern=pattern)


def _translate(selector: str) -> str:
    """Translate selector syntax to (unanchored) regex source."""
    out: List[str] = []
    i = 0
    n = len(selector)

    while i < n:
        char = selector[i]

        if char == "*":
            if selector.startswith("**", i):
                i += 2
                # "/**/" also matches a single separator
                if out and out[-1] == "/" and i < n and selector[i] == "/":
                    out.append("(?:.*/)?")
                    i += 1
                else:
                    out.append(".*")
                continue
            out.append("[^/]*")
        elif char == "?":
            out.append("[^/]")
        elif char == "[":
            end = _find_class_end(selector, i)
            content = selector[i + 1 : end]
            if content.startswith("!"):
                content = "^" + content[1:]
            content = content.replace("\\", "\\\\")
            out.append("(?:(?!/)[" + content + "])")
            i = end
        elif char == "{":
            end = _find_alternation_end(selector, i)
            alternatives = _split_alternatives(selector[i + 1 : end])
            out.append("(?:" + "|".join(_translate(alt) for alt in alternatives) + ")")
            i = end
        elif char == "/":
            out.append("/")
        else:
            out.append(re.escape(char))

        i += 1

    return "".join(out)


def _find_class_end(selector: str, start: int) -> int:
    """Return the index of the "]" closing the class opened at start."""
    j = start + 1
    if j < len(selector) and selector[j] in "!^":
        j += 1
    # A leading "]" is part of the class
    if j < len(selector) and selector[j] == "]":
        j += 1

    end = selector.find("]", j)
    if end == -1:
        raise ValidationError(f"Unclosed character class in selector: {selector}")
    return end


def _find_alternation_end(selector: str, start: int) -> int:
    """Return the index of the "}" closing the alternation opened at start."""
    j = start + 1
    while j < len(selector):
        if selector[j] == "[":
            j = _find_class_end(selector, j)
        elif selector[j] == "}":
            return j
        j += 1
    raise ValidationError(f"Unclosed alternation in selector: {selector}")


def _split_alternatives(content: str) -> List[str]:
    """Split alternation content on the commas outside character classes."""
    alternatives = []
    start = 0
    j = 0
    while j < len(content):
        if content[j] == "[":
            j = _find_class_end(content, j)
        elif content[j] == ",":
            alternatives.append(content[start:j])
            start = j + 1
        j += 1
    alternatives.append(content[start:])
    return alternatives
