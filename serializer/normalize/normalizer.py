"""
Object Normalizer
Converts objects, mappings and sequences into plain ordered dicts
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Optional, Union

import structlog
from pydantic import ValidationError

from shared.schemas.options import NormalizerOptions

from .casing import bind_spec
from .errors import ConfigurationError, CyclicStructureError, InvalidKeyError
from .fields import is_structured, iter_fields
from .settings import load_options_from_env

logger = structlog.get_logger()

# 12-hour clock hour, no AM/PM marker
DATETIME_FORMAT = "%Y-%m-%d %I:%M:%S"


def resolve_options(
    options: Optional[Union[Mapping, NormalizerOptions]] = None,
    **overrides: Any,
) -> NormalizerOptions:
    """
    Validate raw option overrides into a NormalizerOptions record.

    Args:
        options: Mapping of option names (camelCase or snake_case), or an
            already resolved NormalizerOptions
        **overrides: Options applied on top of `options`

    Raises:
        ConfigurationError: unknown option key or wrong value type
    """
    if isinstance(options, NormalizerOptions):
        if not overrides:
            return options
        options = options.model_dump(by_alias=True)
    elif options is not None and not isinstance(options, Mapping):
        raise ConfigurationError(
            f"Normalizer options must be a mapping, got {type(options).__name__}"
        )

    # One spelling per option so overrides replace rather than collide
    raw = {
        **NormalizerOptions.canonicalize(options or {}),
        **NormalizerOptions.canonicalize(overrides),
    }
    try:
        return NormalizerOptions.model_validate(raw)
    except ValidationError as e:
        errors = e.errors()
        keys = list(dict.fromkeys(str(err["loc"][0]) for err in errors if err["loc"]))
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'options'}: {err['msg']}"
            for err in errors
        )
        logger.error("Invalid normalizer options", keys=keys)
        raise ConfigurationError(f"Invalid normalizer options: {details}", keys) from e


def format_datetime(value: datetime) -> str:
    """Render a datetime as UTC; naive values are taken as UTC already"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(DATETIME_FORMAT)


class Normalizer:
    """
    Recursively converts a structured value into an ordered dict.

    Features:
    - Skips protected fields unless includeProtectedProperties
    - Renders datetimes as UTC strings
    - Drops None values unless includeNullValues
    - Converts keys with a named case converter (snake_case_safe by default)
    - Renames or filters keys through a property callback
    - Removes configured and per-call ignored keys
    - Fails fast on cyclic structures
    """

    def __init__(
        self,
        options: Optional[Union[Mapping, NormalizerOptions]] = None,
        **overrides: Any,
    ):
        self.options = resolve_options(options, **overrides)
        logger.debug("Normalizer options resolved", **self.options.summary())

    def normalize(self, value: Any, ignored_keys: Iterable[str] = ()) -> dict[str, Any]:
        """
        Normalize a value into a fresh ordered dict.

        Args:
            value: Object, mapping or sequence. Scalars yield an empty dict.
            ignored_keys: Output keys removed at the top level only

        Returns:
            Ordered dict of (possibly converted) keys to scalars or nested dicts

        Raises:
            CallableResolutionError: case converter or callback name unresolvable
            CyclicStructureError: value contains itself
            InvalidKeyError: property callback returned an unhashable key
        """
        if isinstance(ignored_keys, str):
            ignored_keys = (ignored_keys,)
        return self._normalize(value, frozenset(ignored_keys), set(), [])

    def _normalize(
        self,
        value: Any,
        ignored_keys: frozenset,
        active: set[int],
        path: list[str],
    ) -> dict[str, Any]:
        marker = id(value)
        if marker in active:
            logger.error("Cyclic structure detected", path=".".join(path))
            raise CyclicStructureError(path)

        active.add(marker)
        try:
            return self._normalize_fields(value, ignored_keys, active, path)
        finally:
            active.discard(marker)

    def _normalize_fields(
        self,
        value: Any,
        ignored_keys: frozenset,
        active: set[int],
        path: list[str],
    ) -> dict[str, Any]:
        options = self.options
        result: dict[str, Any] = {}

        for field in iter_fields(value):
            if field.is_protected and not options.include_protected_properties:
                continue

            key: Any = field.name
            item = field.value

            if isinstance(item, datetime):
                item = format_datetime(item)

            if is_structured(item):
                # Per-call ignored keys apply to the top level only
                item = self._normalize(item, frozenset(), active, [*path, key])

            if item is None and not options.include_null_values:
                continue

            if options.convert_properties_to_snake_case:
                key = self._call_spec(options.case_converter_function, key)

            callback = options.property_callback
            if isinstance(callback, str):
                key = self._call_spec(callback, key)
            elif callback is not None:
                key = callback(key, item)
                if key is None or key is False:
                    continue

            try:
                result[key] = item
            except TypeError as e:
                logger.error("Unhashable property key", field=field.name, path=".".join(path))
                raise InvalidKeyError(field.name, key, path) from e

            if key in options.ignored_properties or key in ignored_keys:
                del result[key]

        return result

    @staticmethod
    def _call_spec(spec: Any, key: Any) -> Any:
        """Call a "name|arg2|..." spec (or a plain callable) with the key first"""
        func, args = bind_spec(spec)
        return func(key, *args)


# Default normalizer instance, built from the environment on first use
_default_normalizer: Optional[Normalizer] = None


def get_default_normalizer() -> Normalizer:
    """Get the shared default Normalizer."""
    global _default_normalizer
    if _default_normalizer is None:
        _default_normalizer = Normalizer(load_options_from_env())
    return _default_normalizer


def reset_default_normalizer() -> None:
    """Drop the cached default Normalizer so the next call re-reads the environment"""
    global _default_normalizer
    _default_normalizer = None


def normalize(value: Any, ignored_keys: Iterable[str] = ()) -> dict[str, Any]:
    """Convenience function to normalize with the default normalizer"""
    return get_default_normalizer().normalize(value, ignored_keys)
