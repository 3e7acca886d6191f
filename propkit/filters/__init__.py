"""Wildcard substring patterns for attribute filtering."""

from .substring import (
    CompiledPattern,
    SubstringFilter,
    check_substring,
    compile_pattern,
    matches,
    parse_substring,
)

__all__ = [
    "CompiledPattern",
    "SubstringFilter",
    "check_substring",
    "compile_pattern",
    "matches",
    "parse_substring",
]
