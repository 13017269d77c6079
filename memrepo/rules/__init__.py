"""memrepo Selectors.

This module provides glob-style selector support for repository paths:
- is_selector: Check whether a string contains wildcards
- get_static_prefix: Literal part of a selector before the first wildcard
- compile_selector: Static prefix plus compiled full-path pattern
"""

from .selectors import CompiledSelector, compile_selector, get_static_prefix, is_selector, to_regex

__all__ = [
    "CompiledSelector",
    "compile_selector",
    "get_static_prefix",
    "is_selector",
    "to_regex",
]
