"""
Property sources consulted during variable substitution.

A source is anything with a ``get(name)`` accessor returning the value or
None, so plain dicts and ``os.environ`` work as-is. Sources are read-only from
the substitutor's point of view.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol


class PropertySource(Protocol):
    """Read accessor for a key/value property store."""

    def get(self, name: str) -> Optional[str]:
        ...


class EnvironmentSource:
    """Reads the process environment at lookup time."""

    def get(self, name: str) -> Optional[str]:
        return os.environ.get(name)

    def __repr__(self) -> str:
        return "EnvironmentSource()"


@dataclass(frozen=True)
class MappingSource:
    """Immutable snapshot of a mapping, with values rendered as strings."""
    values: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "MappingSource":
        return cls({str(k): _to_string(v) for k, v in mapping.items()})

    def get(self, name: str) -> Optional[str]:
        return self.values.get(name)


@dataclass
class PropertySources:
    """
    Ordered (primary, fallback) pair of property sources.

    The primary source always wins, even when it holds an empty string.
    The fallback is only asked on a primary miss. A name missing from both
    resolves to the empty string rather than an error.
    """
    primary: Optional[PropertySource] = None
    fallback: Optional[PropertySource] = field(default_factory=EnvironmentSource)

    def lookup(self, name: str) -> str:
        value = self.primary.get(name) if self.primary is not None else None
        if value is None and self.fallback is not None:
            value = self.fallback.get(name)
        if value is None:
            return ""
        return _to_string(value)


def _to_string(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    elif isinstance(value, str):
        return value
    else:
        return str(value)
