"""
Object Normalizer - Field Schemas

Visibility metadata attached to every field an input adapter extracts
"""

from enum import Enum


class FieldVisibility(str, Enum):
    """Declared access level of a field"""
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
