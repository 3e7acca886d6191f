"""Substring pattern compilation and matching for attribute filters.

A pattern is literal text with ``*`` wildcards, as used by the substring
form of an attribute filter (``(cn=Jo*n*th)``). Compiling splits it into
the literal segments between wildcards. Matching walks those segments with
implicit wildcards between them; the first segment anchors the start of the
subject and the last anchors the end.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..exceptions import InvalidPatternError

logger = logging.getLogger(__name__)

WILDCARD = '*'


@dataclass(frozen=True)
class CompiledPattern:
    """Literal segments of a wildcard pattern plus its anchoring flags.

    When the pattern contains a wildcard, ``segments[0]`` is the required
    prefix and ``segments[-1]`` the required suffix; either may be ``""``.
    A pattern without wildcards is a single unanchored segment.
    """
    segments: Tuple[str, ...]
    leading_star: bool = False
    trailing_star: bool = False

    @property
    def pieces(self) -> List[str]:
        return list(self.segments)

    @property
    def is_literal(self) -> bool:
        """True if the pattern held no wildcard at all."""
        return not (self.leading_star or self.trailing_star) and len(self.segments) == 1


def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile a wildcard pattern into its segments.

    Args:
        pattern: Pattern text; leading and trailing blanks are significant

    Returns:
        CompiledPattern ready for repeated matching

    Raises:
        InvalidPatternError: If two '*' appear next to each other
    """
    pieces: List[str] = []
    current: List[str] = []
    was_star = False
    leading_star = False
    trailing_star = False

    for c in pattern:
        if c == WILDCARD:
            if was_star:
                raise InvalidPatternError(pattern)
            if current:
                pieces.append(''.join(current))
            current = []
            if not pieces:
                leading_star = True
            was_star = True
        else:
            was_star = False
            current.append(c)

    if was_star:
        trailing_star = True
    else:
        # May be "" for an empty pattern
        pieces.append(''.join(current))

    # Insert empty anchors so the first and last segments always carry the
    # required prefix and suffix.
    if leading_star or trailing_star or len(pieces) > 1:
        if trailing_star:
            pieces.append('')
        if leading_star:
            pieces.insert(0, '')

    logger.debug(f"Compiled pattern {pattern!r} into {pieces}")
    return CompiledPattern(tuple(pieces), leading_star, trailing_star)


def matches(compiled: CompiledPattern, subject: str) -> bool:
    """Test a subject against a compiled pattern."""
    return check_substring(compiled.segments, subject)


def parse_substring(target: str) -> List[str]:
    """Return the raw segment list for a pattern."""
    return compile_pattern(target).pieces


def check_substring(pieces: Sequence[str], s: str) -> bool:
    """Walk the pieces to match the string.

    There are implicit wildcards between each piece. The first piece must be
    a prefix of the subject and the last piece a suffix; the suffix check
    decides the result. Interior pieces must occur in order, each searched
    for after the end of the previous one.

    A single piece must be both a prefix and a suffix, which is weaker than
    equality ("abc" matches "abcabc").
    """
    last = len(pieces) - 1
    index = 0

    for i, piece in enumerate(pieces):
        if i == 0 and not s.startswith(piece):
            return False

        if i == last:
            return s.endswith(piece)

        if i > 0:
            index = s.find(piece, index)
            if index < 0:
                return False

        # Move past the matching piece
        index += len(piece)

    return True


class SubstringFilter:
    """A compiled wildcard pattern bound to its source text."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.compiled = compile_pattern(pattern)

    def matches(self, subject: str) -> bool:
        return matches(self.compiled, subject)

    __call__ = matches

    def __repr__(self) -> str:
        return f"SubstringFilter({self.pattern!r})"
