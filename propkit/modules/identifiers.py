"""Helpers for splitting module ids, class names and resource paths.

Module ids have the form ``<bundle-id>.<revision>``.
"""

import re
from typing import Optional

# Optional sign then ASCII digits; int() alone would also take '1_0' or ' 5 '.
_INTEGER = re.compile(r'[+-]?[0-9]+')


def _parse_int(text: str) -> int:
    return int(text) if _INTEGER.fullmatch(text) else -1


def bundle_id_from_module_id(module_id: str) -> int:
    """Return the bundle id part of a module id, or -1 if it is not numeric."""
    return _parse_int(module_id.split('.', 1)[0])


def revision_from_module_id(module_id: str) -> int:
    """Return the revision part of a module id, or -1 if absent or not numeric."""
    if '.' not in module_id:
        return -1
    return _parse_int(module_id.split('.', 1)[1])


def class_name(name: Optional[str]) -> str:
    """Unqualified name of a dotted class name; "" when it has no package."""
    name = name or ""
    if '.' not in name:
        return ""
    return name.rsplit('.', 1)[1]


def class_package(name: Optional[str]) -> str:
    name = name or ""
    if '.' not in name:
        return ""
    return name.rsplit('.', 1)[0]


def resource_package(resource: Optional[str]) -> str:
    """
    Package of a resource path, as a dotted name.

    Resource names do not follow class naming rules, so everything up to the
    last '/' is taken as the package: "/foo/bar/res.txt" -> "foo.bar". A
    relative name such as "bar/res.txt" imported from package "foo" is
    therefore not recognised as belonging to "foo".
    """
    resource = resource or ""
    pkg_name = resource[1:] if resource.startswith('/') else resource
    if '/' not in pkg_name:
        return ""
    return pkg_name.rsplit('/', 1)[0].replace('/', '.')
