"""Object Normalizer Shared Schemas"""

from .fields import FieldVisibility
from .options import (
    DEFAULT_CASE_CONVERTER,
    SQL_BEHAVIOURAL_PROPERTIES,
    FunctionSpec,
    NormalizerOptions,
)

__all__ = [
    # Field schemas
    "FieldVisibility",
    # Option schemas
    "NormalizerOptions",
    "FunctionSpec",
    "DEFAULT_CASE_CONVERTER",
    "SQL_BEHAVIOURAL_PROPERTIES",
]
