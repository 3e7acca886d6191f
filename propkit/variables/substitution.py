"""
Variable substitution implementation.
Expands ${name} placeholders, innermost nesting first, against a primary
property source and a fallback source, rejecting circular references.
"""

import logging
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Set, Tuple, Union

from ..exceptions import CyclicReferenceError, UnmatchedDelimiterError
from .sources import EnvironmentSource, MappingSource, PropertySource, PropertySources

logger = logging.getLogger(__name__)

DELIM_START = '${'
DELIM_STOP = '}'

_ENVIRONMENT = EnvironmentSource()

# A run of text in the value being expanded, with the names whose
# substitution produced it.
Chunk = Tuple[str, FrozenSet[str]]


def subst_vars(
    value: str,
    current_key: Optional[str],
    cycle_set: Optional[Set[str]] = None,
    properties: Union[PropertySources, PropertySource, None] = None,
    fallback: Optional[PropertySource] = _ENVIRONMENT
) -> str:
    """
    Perform property variable substitution on a value.

    Given a value like "leading ${foo.${bar}} middle ${baz} trailing", the
    deepest nested placeholder is replaced first (${bar}), then the one it was
    nested in, then the remaining ones left to right. Each looked-up value is
    spliced in as-is and the whole string is scanned again, so a value may
    open or close placeholders around it. Primary properties override the
    fallback source; names found in neither expand to "".

    Args:
        value: String to expand
        current_key: Key of the property being evaluated, used to detect
            self-references
        cycle_set: Names whose expansion is in progress. A fresh set is used
            when None. Its contents are the same on return as on entry.
        properties: Primary source, or a complete PropertySources pair (in
            which case fallback is ignored)
        fallback: Source consulted on a primary miss; the process
            environment by default, None for no fallback

    Returns:
        The expanded string

    Raises:
        UnmatchedDelimiterError: A '}' appears with no '${' before it
        CyclicReferenceError: A variable refers back to itself
    """
    if cycle_set is None:
        cycle_set = set()
    if isinstance(properties, PropertySources):
        sources = properties
    else:
        sources = PropertySources(primary=properties, fallback=fallback)

    seeded = current_key is not None and current_key not in cycle_set
    if seeded:
        cycle_set.add(current_key)
    try:
        return _expand(value, cycle_set, sources)
    finally:
        if seeded:
            cycle_set.discard(current_key)


def _expand(value: str, cycle_set: Set[str], sources: PropertySources) -> str:
    chunks: List[Chunk] = [(value, frozenset())]
    while True:
        value = ''.join(text for text, _ in chunks)

        # The first '}' closes the deepest nested placeholder; its '${' is
        # the last one before it.
        stop_delim = value.find(DELIM_STOP)
        if stop_delim < 0:
            # Nothing left to close. A dangling '${' stays literal.
            return value

        start_delim = value.rfind(DELIM_START, 0, stop_delim)
        if start_delim < 0:
            raise UnmatchedDelimiterError(value)

        end = stop_delim + len(DELIM_STOP)
        variable = value[start_delim + len(DELIM_START):stop_delim]

        # A placeholder built from text that a variable's value produced is
        # still part of that variable's expansion.
        produced_by = _origins(chunks, start_delim, end)
        if variable in cycle_set or variable in produced_by:
            raise CyclicReferenceError(variable)

        cycle_set.add(variable)
        try:
            subst_value = sources.lookup(variable)
        finally:
            cycle_set.discard(variable)

        logger.debug(f"Resolved ${{{variable}}} -> {subst_value!r}")

        chunks = _splice(chunks, start_delim, end, (subst_value, produced_by | {variable}))


def _origins(chunks: List[Chunk], start: int, end: int) -> FrozenSet[str]:
    origins: FrozenSet[str] = frozenset()
    offset = 0
    for text, names in chunks:
        if offset < end and offset + len(text) > start:
            origins |= names
        offset += len(text)
    return origins


def _splice(chunks: List[Chunk], start: int, end: int, replacement: Chunk) -> List[Chunk]:
    """Replace value[start:end] with the replacement chunk."""
    spliced: List[Chunk] = []
    offset = 0
    for text, names in chunks:
        chunk_end = offset + len(text)
        if offset < start:
            spliced.append((text[:start - offset], names))
        if chunk_end > start and offset <= start:
            spliced.append(replacement)
        if chunk_end > end:
            spliced.append((text[max(end - offset, 0):], names))
        offset = chunk_end
    return [chunk for chunk in spliced if chunk[0]]


class VariableSubstitutor:
    """
    Handles variable substitution in strings and data structures.

    Holds the property source pair so repeated substitutions share the same
    lookup order:
    - primary: configuration properties
    - fallback: process environment (by default)
    """

    def __init__(self, sources: Optional[PropertySources] = None):
        """Initialize the substitutor."""
        self.sources = sources if sources is not None else PropertySources()

    @classmethod
    def from_mapping(
        cls,
        properties: Mapping[str, Any],
        use_environment: bool = True
    ) -> "VariableSubstitutor":
        """Build a substitutor over a plain mapping of properties."""
        fallback = EnvironmentSource() if use_environment else None
        return cls(PropertySources(MappingSource.from_mapping(properties), fallback))

    def substitute(
        self,
        value: Union[str, List, Dict, Any],
        current_key: Optional[str] = None
    ) -> Union[str, List, Dict, Any]:
        """
        Substitute variables in a value (string, list, or dict).

        Every string is expanded with its own cycle set. Dict values use
        their key as the current key so a self-referencing entry is caught.

        Args:
            value: The value to substitute variables in
            current_key: Key of the property being evaluated

        Returns:
            Value with variables substituted
        """
        if isinstance(value, str):
            return subst_vars(value, current_key, set(), self.sources)
        elif isinstance(value, list):
            return [self.substitute(item, current_key) for item in value]
        elif isinstance(value, dict):
            return {k: self.substitute(v, k) for k, v in value.items()}
        else:
            # Non-string/list/dict values pass through unchanged
            return value

    def resolve_all(self, properties: Mapping[str, Any]) -> Dict[str, str]:
        """
        Resolve every entry of a property map against the map itself.

        The map becomes the primary source; this substitutor's fallback is
        kept. The input mapping is not modified.

        Raises:
            SubstitutionError: On the first entry that cannot be expanded
        """
        primary = MappingSource.from_mapping(properties)
        sources = PropertySources(primary, self.sources.fallback)

        resolved = {}
        for key, raw in primary.values.items():
            resolved[key] = subst_vars(raw, key, set(), sources)
        logger.debug(f"Resolved {len(resolved)} properties")
        return resolved
