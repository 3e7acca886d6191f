"""Subst command: resolve property files and print the expanded values."""

import logging
from argparse import Namespace
from pathlib import Path
from typing import Dict, List

from propkit.exceptions import PropertiesValidationError, SubstitutionError
from propkit.loader import PropertiesLoader
from propkit.variables.sources import EnvironmentSource, MappingSource, PropertySources
from propkit.variables.substitution import VariableSubstitutor, subst_vars


logger = logging.getLogger(__name__)


def parse_overrides(items: List[str]) -> Dict[str, str]:
    """Parse KEY=VALUE overrides from the command line."""
    overrides = {}
    for item in items or []:
        if '=' not in item:
            raise ValueError(f"Invalid property format: {item}. Expected KEY=VALUE")
        key, value = item.split('=', 1)
        if not key:
            raise ValueError(f"Invalid KEY in pair: {item}")
        overrides[key] = value
    return overrides


def subst_properties(args: Namespace) -> int:
    """
    Load property files, expand the named keys (or every property) and
    print 'key=value' lines. Unnamed properties are not expanded.

    Later files override earlier ones and --set overrides all files.

    Returns:
        0 on success, 1 if a file is missing, 2 on validation or
        substitution errors
    """
    properties: Dict[str, str] = {}
    loader = PropertiesLoader()

    try:
        for props_file in args.props or []:
            path = Path(props_file)
            if not path.exists():
                logger.error(f"Properties file not found: {path}")
                return 1
            logger.info(f"Loading properties: {path}")
            properties.update(loader.load(path))

        properties.update(parse_overrides(args.set))

        fallback = None if args.no_env else EnvironmentSource()
        if args.keys:
            sources = PropertySources(MappingSource.from_mapping(properties), fallback)
            resolved = {}
            for key in args.keys:
                if key not in properties:
                    logger.warning(f"Property not defined: {key}")
                    continue
                resolved[key] = subst_vars(properties[key], key, set(), sources)
        else:
            substitutor = VariableSubstitutor(PropertySources(fallback=fallback))
            resolved = substitutor.resolve_all(properties)
    except PropertiesValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code
    except SubstitutionError as e:
        logger.error(f"Substitution error ({e.kind}): {e}")
        return 2
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 2

    for key in args.keys or sorted(resolved):
        print(f"{key}={resolved.get(key, '')}")

    return 0
