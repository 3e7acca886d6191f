"""Module model helpers: identifiers and capabilities."""

from .capabilities import (
    FRAGMENT_HOST,
    PACKAGE_NAMESPACE,
    Capability,
    Module,
    Requirement,
    Wire,
    get_capabilities_by_namespace,
    get_satisfying_capability,
    get_wire,
    is_fragment,
)
from .identifiers import (
    bundle_id_from_module_id,
    class_name,
    class_package,
    resource_package,
    revision_from_module_id,
)

__all__ = [
    "FRAGMENT_HOST",
    "PACKAGE_NAMESPACE",
    "Capability",
    "Module",
    "Requirement",
    "Wire",
    "bundle_id_from_module_id",
    "class_name",
    "class_package",
    "get_capabilities_by_namespace",
    "get_satisfying_capability",
    "get_wire",
    "is_fragment",
    "resource_package",
    "revision_from_module_id",
]
