"""
Normalize Service
Converts structured objects into plain ordered dicts

Components:
- normalizer.py: Normalizer for object -> dict conversion
- fields.py: field-set extraction with per-field visibility
- casing.py: case converters and key callbacks addressable by name
- settings.py: option defaults from NORMALIZER_* environment variables
- cli.py: Command-line interface for JSON files
"""

from .casing import FUNCTION_REGISTRY, register_function, snake_case_safe
from .errors import (
    CallableResolutionError,
    ConfigurationError,
    CyclicStructureError,
    InvalidKeyError,
    NormalizerError,
)
from .normalizer import (
    Normalizer,
    get_default_normalizer,
    normalize,
    reset_default_normalizer,
    resolve_options,
)

__all__ = [
    "Normalizer",
    "normalize",
    "get_default_normalizer",
    "reset_default_normalizer",
    "resolve_options",
    "register_function",
    "snake_case_safe",
    "FUNCTION_REGISTRY",
    "NormalizerError",
    "ConfigurationError",
    "CallableResolutionError",
    "CyclicStructureError",
    "InvalidKeyError",
]
