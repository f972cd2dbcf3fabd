"""
Normalizer Settings
Reads default normalizer options from NORMALIZER_* environment variables
"""

import os
from typing import Any, Optional

from .errors import ConfigurationError

ENV_PREFIX = "NORMALIZER_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# Environment suffix -> option alias
_BOOL_OPTIONS = {
    "INCLUDE_PROTECTED_PROPERTIES": "includeProtectedProperties",
    "INCLUDE_NULL_VALUES": "includeNullValues",
    "CONVERT_PROPERTIES_TO_SNAKE_CASE": "convertPropertiesToSnakeCase",
    "IGNORE_SQL_BEHAVIOURAL_PROPERTIES": "ignoreSqlBehaviouralProperties",
}
_STR_OPTIONS = {
    "CASE_CONVERTER_FUNCTION": "caseConverterFunction",
    "PROPERTY_CALLBACK": "propertyCallback",
}


def parse_bool(name: str, value: str) -> bool:
    """Parse a boolean environment value"""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}", [name])


def load_options_from_env(environ: Optional[dict[str, str]] = None) -> dict[str, Any]:
    """
    Collect raw normalizer options from the environment.

    Only variables that are set are returned, so unset options keep their
    schema defaults.

    Args:
        environ: Mapping to read instead of os.environ

    Returns:
        Raw option dict keyed by option alias
    """
    env = os.environ if environ is None else environ
    options: dict[str, Any] = {}

    for suffix, alias in _BOOL_OPTIONS.items():
        value = env.get(ENV_PREFIX + suffix)
        if value is not None and value.strip():
            options[alias] = parse_bool(ENV_PREFIX + suffix, value)

    for suffix, alias in _STR_OPTIONS.items():
        value = env.get(ENV_PREFIX + suffix)
        if value:
            options[alias] = value

    ignored = env.get(ENV_PREFIX + "IGNORED_PROPERTIES")
    if ignored:
        options["ignoredProperties"] = [key.strip() for key in ignored.split(",") if key.strip()]

    return options
