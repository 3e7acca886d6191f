"""
Variable substitution module.
Expands nested ${name} placeholders against ordered property sources.
"""

from .sources import EnvironmentSource, MappingSource, PropertySource, PropertySources
from .substitution import VariableSubstitutor, subst_vars

__all__ = [
    'EnvironmentSource',
    'MappingSource',
    'PropertySource',
    'PropertySources',
    'VariableSubstitutor',
    'subst_vars',
]
