"""
Type visibility search.

Checks whether a service object's declared types can be resolved from the
object's own class. The object's class may not see a declared type directly
when it inherits it through a base class or an interface defined elsewhere,
so the search asks the class itself, then each of its secondary bases (the
interfaces it implements), then walks up the primary base chain.
"""

import importlib
import logging
import sys
from typing import Any, Callable, Iterable, Optional

logger = logging.getLogger(__name__)

# (class whose loader to use, type name) -> type or None
ClassLoader = Callable[[type, str], Optional[type]]


def module_namespace_loader(cls: type, name: str) -> Optional[type]:
    """
    Resolve a type name the way code in cls's module would see it.

    Dotted names are imported as 'package.module.Type'. Bare names are looked
    up in the namespace of the module that defines cls.
    """
    if '.' in name:
        module_name, _, attr = name.rpartition('.')
        try:
            module = importlib.import_module(module_name)
        except (ImportError, ValueError):
            return None
    else:
        module = sys.modules.get(cls.__module__)
        attr = name
    found = getattr(module, attr, None)
    return found if isinstance(found, type) else None


def load_class_using_class(
    cls: Optional[type],
    name: str,
    loader: Optional[ClassLoader] = None
) -> Optional[type]:
    """
    Load a type by name using the loader of cls, its interfaces or its bases.

    Args:
        cls: Root of the search
        name: Name of the type to load
        loader: Lookup to use for each class; defaults to module_namespace_loader

    Returns:
        The loaded type, or None if no class in the hierarchy can see it
    """
    loader = loader or module_namespace_loader

    while cls is not None:
        loaded = loader(cls, name)
        if loaded is not None:
            logger.debug(f"Loaded {name} via {cls.__qualname__}")
            return loaded

        for interface in cls.__bases__[1:]:
            loaded = load_class_using_class(interface, name, loader)
            if loaded is not None:
                return loaded

        cls = cls.__bases__[0] if cls.__bases__ else None

    return None


def is_service_assignable(
    requester: Any,
    object_classes: Iterable[str],
    is_assignable_to: Callable[[Any, str], bool]
) -> bool:
    """
    True if the requester can use every declared class of a service.

    A single declared class the requester cannot see makes the whole
    service unusable for it.
    """
    return all(is_assignable_to(requester, class_name) for class_name in object_classes)
