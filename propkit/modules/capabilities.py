"""Capability lookups over a minimal module model."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..filters.substring import WILDCARD, SubstringFilter

PACKAGE_NAMESPACE = "package"
FRAGMENT_HOST = "Fragment-Host"


@dataclass
class Capability:
    """Something a module provides, e.g. an exported package."""
    namespace: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def package_name(self) -> Optional[str]:
        return self.attributes.get(PACKAGE_NAMESPACE)


@dataclass
class Requirement:
    """
    Something a module needs, matched against capabilities of the same namespace.

    The filter maps attribute names to expected values. String values holding
    a '*' are substring patterns; anything else must be equal.
    """
    namespace: str
    filter: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self._patterns = {
            name: SubstringFilter(expected)
            for name, expected in self.filter.items()
            if isinstance(expected, str) and WILDCARD in expected
        }

    def is_satisfied(self, capability: Capability) -> bool:
        if capability.namespace != self.namespace:
            return False
        for name, expected in self.filter.items():
            if name not in capability.attributes:
                return False
            actual = capability.attributes[name]
            pattern = self._patterns.get(name)
            if pattern is not None:
                if not isinstance(actual, str) or not pattern.matches(actual):
                    return False
            elif actual != expected:
                return False
        return True


@dataclass
class Wire:
    """Connects an importing module to the capability an exporter provides."""
    importer: str
    exporter: str
    capability: Capability


@dataclass
class Module:
    id: str
    headers: Dict[str, str] = field(default_factory=dict)
    capabilities: List[Capability] = field(default_factory=list)
    wires: List[Wire] = field(default_factory=list)


def get_satisfying_capability(module: Module, requirement: Requirement) -> Optional[Capability]:
    """Return the first capability of the module that satisfies the requirement."""
    for capability in module.capabilities or []:
        if capability.namespace == requirement.namespace and requirement.is_satisfied(capability):
            return capability
    return None


def get_capabilities_by_namespace(module: Module, namespace: str) -> List[Capability]:
    """
    Return all capabilities of a module in the given namespace.

    Args:
        module: Module providing capabilities
        namespace: Capability namespace

    Returns:
        Matching capabilities in declaration order, empty if none
    """
    return [c for c in module.capabilities or [] if c.namespace == namespace]


def get_wire(module: Module, package_name: str) -> Optional[Wire]:
    """Return the module's wire for an imported package, if it has one."""
    for wire in module.wires or []:
        if (wire.capability.namespace == PACKAGE_NAMESPACE
                and wire.capability.package_name == package_name):
            return wire
    return None


def is_fragment(module: Module) -> bool:
    """True if the module declares a fragment host."""
    return FRAGMENT_HOST in module.headers
