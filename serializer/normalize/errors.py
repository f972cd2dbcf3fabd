"""
Normalizer Errors
Exception taxonomy raised by option resolution and normalization
"""

from typing import Iterable


class NormalizerError(Exception):
    """Base class for all normalizer failures"""


class ConfigurationError(NormalizerError, ValueError):
    """Raised at construction time for unknown or mistyped options"""

    def __init__(self, message: str, keys: Iterable[str] = ()):
        super().__init__(message)
        self.keys = tuple(keys)


class CallableResolutionError(NormalizerError, LookupError):
    """Raised when a case converter or callback name cannot be resolved"""

    def __init__(self, name: str):
        super().__init__(f"Function with `{name}` could not be found")
        self.name = name


class CyclicStructureError(NormalizerError, ValueError):
    """Raised when a value contains itself along the current recursion path"""

    def __init__(self, path: list[str]):
        location = ".".join(path) or "<root>"
        super().__init__(f"Cyclic reference detected at {location}")
        self.path = list(path)


class InvalidKeyError(NormalizerError, TypeError):
    """Raised when a property callback returns a key that cannot index a dict"""

    def __init__(self, field: str, key: object, path: list[str]):
        location = ".".join([*path, field])
        super().__init__(
            f"Property callback returned unhashable key {key!r} for field {location}"
        )
        self.field = field
        self.key = key
        self.path = list(path)
