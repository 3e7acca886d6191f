"""Property file loader with strict validation."""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml

from propkit.exceptions import ValidationError, PropertiesValidationError
from propkit.variables.sources import EnvironmentSource, PropertySources
from propkit.variables.substitution import VariableSubstitutor

logger = logging.getLogger(__name__)


class LiteralLoader(yaml.SafeLoader):
    """YAML loader that keeps every plain scalar as the string it was written as.

    Property values are text: 'on', 'yes', '010' or '1e3' must not turn into
    booleans or numbers before substitution sees them.
    """
    pass


_CONVERTED_TAGS = {
    'tag:yaml.org,2002:bool',
    'tag:yaml.org,2002:int',
    'tag:yaml.org,2002:float',
    'tag:yaml.org,2002:null',
    'tag:yaml.org,2002:timestamp',
    'tag:yaml.org,2002:value',
}

LiteralLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _CONVERTED_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class PropertiesLoader:
    """Loads key/value property files (YAML or .properties) and validates them."""

    YAML_SUFFIXES = {".yaml", ".yml"}
    PROPERTIES_SUFFIXES = {".properties", ".props", ".conf"}

    def __init__(self):
        self.errors: List[ValidationError] = []

    def load(self, path: Path) -> Dict[str, str]:
        """Load and validate a property file.

        Raises:
            PropertiesValidationError: With every problem found in the file
        """
        path = Path(path)
        self.errors = []
        suffix = path.suffix.lower()

        try:
            text = path.read_text(encoding='utf-8')
        except OSError as e:
            self._add_error(f"Failed to read properties: {e}")
            self._raise_validation_errors()

        if suffix in self.YAML_SUFFIXES:
            properties = self._load_yaml(text)
        elif suffix in self.PROPERTIES_SUFFIXES:
            properties = self._load_properties(text)
        else:
            self._add_error(
                f"Unsupported property file type '{suffix}'. "
                f"Supported: {sorted(self.YAML_SUFFIXES | self.PROPERTIES_SUFFIXES)}"
            )
            properties = {}

        if self.errors:
            self._raise_validation_errors()

        logger.debug(f"Loaded {len(properties)} properties from {path}")
        return properties

    def load_resolved(self, path: Path, use_environment: bool = True) -> Dict[str, str]:
        """Load a property file and expand every value against the file itself."""
        properties = self.load(path)
        fallback = EnvironmentSource() if use_environment else None
        return VariableSubstitutor(PropertySources(fallback=fallback)).resolve_all(properties)

    def _load_yaml(self, text: str) -> Dict[str, str]:
        try:
            data = yaml.load(text, Loader=LiteralLoader)
        except yaml.YAMLError as e:
            self._add_error(f"Failed to parse YAML: {e}")
            return {}

        if data is None or data == "":
            return {}
        if not isinstance(data, dict):
            self._add_error("Properties must be a YAML mapping of names to values")
            return {}

        properties = {}
        for key, value in data.items():
            if not isinstance(key, str) or not key:
                self._add_error(f"Property name must be a non-empty string, got {key!r}")
                continue
            if isinstance(value, (dict, list)):
                self._add_error(
                    f"Property value must be a scalar, got {type(value).__name__}", path=key
                )
                continue
            properties[key] = self._to_string(value)
        return properties

    def _load_properties(self, text: str) -> Dict[str, str]:
        """Parse text in the java.util.Properties line format.

        A line ending in an odd number of backslashes continues on the next
        line, whose leading whitespace is dropped. The key ends at the first
        unescaped '=', ':' or whitespace; the separator may be surrounded by
        whitespace or be whitespace alone. The value keeps trailing
        whitespace. Escapes \\t \\n \\r \\f and \\uXXXX are decoded and any
        other escaped character stands for itself.

        Empty keys are rejected, unlike java.util.Properties.
        """
        properties = {}
        for lineno, line in _logical_lines(text):
            key, value = _split_entry(line)
            try:
                key = _unescape(key)
                value = _unescape(value)
            except ValueError as e:
                self._add_error(str(e), path=f"line {lineno}")
                continue

            if not key:
                self._add_error("Property name must not be empty", path=f"line {lineno}")
                continue
            properties[key] = value
        return properties

    def _to_string(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return 'true' if value else 'false'
        return str(value)

    def _add_error(self, message: str, path: Optional[str] = None):
        self.errors.append(ValidationError(message=message, path=path or ""))

    def _raise_validation_errors(self):
        raise PropertiesValidationError(self.errors)


_LINE_BREAK = re.compile(r'\r\n|\r|\n')
_HEX4 = re.compile(r'[0-9a-fA-F]{4}')
_WHITESPACE = ' \t\f'
_SEPARATORS = '=:'
_ESCAPES = {'t': '\t', 'n': '\n', 'r': '\r', 'f': '\f'}


def _continues(line: str) -> bool:
    return (len(line) - len(line.rstrip('\\'))) % 2 == 1


def _logical_lines(text: str):
    """Yield (first physical line number, logical line) for each entry."""
    lines = _LINE_BREAK.split(text)
    index = 0
    while index < len(lines):
        lineno = index + 1
        line = lines[index].lstrip(_WHITESPACE)
        index += 1
        if not line or line[0] in '#!':
            continue

        while _continues(line) and index < len(lines):
            line = line[:-1] + lines[index].lstrip(_WHITESPACE)
            index += 1
        if _continues(line):
            line = line[:-1]
        yield lineno, line


def _split_entry(line: str):
    """Split a logical line into its still-escaped key and value."""
    index = 0
    while index < len(line):
        char = line[index]
        if char == '\\':
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1

    key = line[:index]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest[:1] and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(text: str) -> str:
    out = []
    index = 0
    while index < len(text):
        char = text[index]
        index += 1
        if char != '\\' or index == len(text):
            out.append(char)
            continue

        char = text[index]
        index += 1
        if char == 'u':
            digits = text[index:index + 4]
            if not _HEX4.fullmatch(digits):
                raise ValueError(f"Malformed \\uXXXX encoding: \\u{digits}")
            out.append(chr(int(digits, 16)))
            index += 4
        else:
            out.append(_ESCAPES.get(char, char))
    return ''.join(out)
