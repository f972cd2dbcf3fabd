"""
Field Extraction
Turns any input value into the field set the normalizer walks

Records report per-field visibility from Python naming conventions:
- `_Owner__name` (name-mangled `__name` declared on Owner) -> private
- `_name` -> protected
- everything else -> public
Mappings, namedtuples and sequences report every entry as public.
"""

import types
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any, Iterator
from uuid import UUID

from shared.schemas.fields import FieldVisibility

SEQUENCE_TYPES = (list, tuple, set, frozenset)

# Values that never expose a field set even though some carry a __dict__
SCALAR_TYPES = (
    str, bytes, bytearray, int, float, complex, bool, Decimal, UUID, PurePath,
    date, datetime, time, timedelta, Enum,
    type, types.ModuleType, types.FunctionType, types.BuiltinFunctionType, types.MethodType,
)


@dataclass(frozen=True)
class FieldDescriptor:
    """One enumerable field: clean name, declared visibility and raw value"""
    name: str
    visibility: FieldVisibility
    value: Any

    @property
    def is_protected(self) -> bool:
        return self.visibility is FieldVisibility.PROTECTED


def is_record(value: Any) -> bool:
    """True for object instances whose attributes form a field set"""
    if value is None or isinstance(value, SCALAR_TYPES):
        return False
    return hasattr(value, "__dict__") or hasattr(type(value), "__slots__")


def is_structured(value: Any) -> bool:
    """True for any value the normalizer recurses into"""
    return isinstance(value, (Mapping, *SEQUENCE_TYPES)) or is_record(value)


def iter_fields(value: Any) -> Iterator[FieldDescriptor]:
    """
    Enumerate the field set of `value` in its natural order.

    Scalars have no fields and yield nothing.
    """
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield FieldDescriptor(str(key), FieldVisibility.PUBLIC, item)
    elif _is_namedtuple(value):
        for key, item in value._asdict().items():
            yield FieldDescriptor(key, FieldVisibility.PUBLIC, item)
    elif isinstance(value, SEQUENCE_TYPES):
        for index, item in enumerate(value):
            yield FieldDescriptor(str(index), FieldVisibility.PUBLIC, item)
    elif is_record(value):
        yield from _iter_record_fields(value)


def split_visibility(raw_name: str, owners: tuple[str, ...]) -> tuple[str, FieldVisibility]:
    """Map a raw attribute name to (clean name, visibility)"""
    for owner in owners:
        mangled_prefix = f"_{owner.lstrip('_')}__"
        if raw_name.startswith(mangled_prefix) and len(raw_name) > len(mangled_prefix):
            return raw_name[len(mangled_prefix):], FieldVisibility.PRIVATE

    if raw_name.startswith("_") and len(raw_name) > 1:
        return raw_name[1:], FieldVisibility.PROTECTED

    return raw_name, FieldVisibility.PUBLIC


def _iter_record_fields(record: Any) -> Iterator[FieldDescriptor]:
    mro = type(record).__mro__
    owners = tuple(cls.__name__ for cls in mro if cls is not object)

    seen: set[str] = set()
    for raw_name, item in _iter_raw_attributes(record, mro):
        if raw_name in seen or _is_dunder(raw_name):
            continue
        seen.add(raw_name)
        name, visibility = split_visibility(raw_name, owners)
        yield FieldDescriptor(name, visibility, item)


def _iter_raw_attributes(record: Any, mro: tuple[type, ...]) -> Iterator[tuple[str, Any]]:
    # Slots first, base classes before subclasses
    for cls in reversed(mro):
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if _is_dunder(slot):
                continue
            if slot.startswith("__"):
                slot = f"_{cls.__name__.lstrip('_')}{slot}"
            try:
                value = getattr(record, slot)
            except AttributeError:
                # Unset slot
                continue
            yield slot, value

    instance_dict = getattr(record, "__dict__", None)
    if isinstance(instance_dict, dict):
        yield from instance_dict.items()


def _is_namedtuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields") and hasattr(value, "_asdict")


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")
