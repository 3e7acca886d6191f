"""propkit exceptions."""

from typing import List
from dataclasses import dataclass


class PropkitError(Exception):
    """Base class for all propkit errors."""


class SubstitutionError(PropkitError, ValueError):
    """Raised when a value cannot be expanded.

    The ``kind`` attribute tells callers which rule was violated without
    having to inspect the message.
    """

    kind = "substitution"


class UnmatchedDelimiterError(SubstitutionError):
    """A closing '}' appears with no opening '${' before it."""

    kind = "unmatched_delimiter"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"stop delimiter with no start delimiter: {value}")


class CyclicReferenceError(SubstitutionError):
    """A variable was referenced while its own expansion was in progress."""

    kind = "cyclic_reference"

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"recursive variable reference: {variable}")


class InvalidPatternError(PropkitError, ValueError):
    """Raised when a substring pattern holds two adjacent '*' wildcards."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f"Invalid filter string: {pattern}")


@dataclass
class ValidationError:
    """Single validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class PropertiesValidationError(PropkitError):
    """Raised when a property file fails validation.

    The loader collects every problem before raising so the CLI can report
    them all at once and map them to an exit code.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Validation error at '{error.path}': {error.message}")
            else:
                messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))
