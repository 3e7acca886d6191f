"""CLI command handlers."""

from .encode import encode_stdin
from .match import match_subjects
from .subst import subst_properties

__all__ = ['encode_stdin', 'match_subjects', 'subst_properties']
