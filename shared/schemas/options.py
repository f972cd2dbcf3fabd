"""
Object Normalizer - Option Schemas

Defines the resolved NormalizerOptions record. Options are accepted under
their camelCase names or their Python attribute names.
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator, model_validator

# Default case converter: function name followed by its pipe-delimited extra arguments
DEFAULT_CASE_CONVERTER = "snake_case_safe|_"

# Timestamp/actor bookkeeping columns excluded by ignoreSqlBehaviouralProperties
SQL_BEHAVIOURAL_PROPERTIES = (
    "created_at", "created_by",
    "updated_at", "updated_by",
    "deleted_at", "deleted_by",
)

FunctionSpec = Union[StrictStr, Callable[..., Any]]


class NormalizerOptions(BaseModel):
    """
    Configuration resolved once per Normalizer.
    Unknown keys and mistyped values are rejected.
    """
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    include_protected_properties: StrictBool = Field(False, alias="includeProtectedProperties")
    include_null_values: StrictBool = Field(False, alias="includeNullValues")
    property_callback: Optional[FunctionSpec] = Field(
        None, alias="propertyCallback", description="'name|arg2|arg3' or callable(key, value)"
    )
    ignored_properties: frozenset[StrictStr] = Field(default_factory=frozenset, alias="ignoredProperties")
    convert_properties_to_snake_case: StrictBool = Field(True, alias="convertPropertiesToSnakeCase")
    case_converter_function: FunctionSpec = Field(DEFAULT_CASE_CONVERTER, alias="caseConverterFunction")
    ignore_sql_behavioural_properties: StrictBool = Field(False, alias="ignoreSqlBehaviouralProperties")

    @model_validator(mode="before")
    @classmethod
    def _merge_sql_behavioural_properties(cls, data: Any) -> Any:
        """Add the audit columns to the ignore list before field validation"""
        if not isinstance(data, Mapping):
            return data

        data = cls.canonicalize(data)
        if not data.get("ignoreSqlBehaviouralProperties"):
            return data

        current = data.get("ignoredProperties", ())
        if isinstance(current, (list, tuple, set, frozenset)):
            data["ignoredProperties"] = [*current, *SQL_BEHAVIOURAL_PROPERTIES]
        return data

    @classmethod
    def canonicalize(cls, data: Mapping) -> dict[str, Any]:
        """
        Rename Python attribute names to their camelCase option names.

        When one option appears under both spellings the later entry wins.
        Unknown keys are kept so validation can reject them.
        """
        aliases = {name: field.alias for name, field in cls.model_fields.items() if field.alias}
        canonical: dict[str, Any] = {}
        for key, value in data.items():
            canonical[aliases.get(key, key)] = value
        return canonical

    @field_validator("ignored_properties", mode="before")
    @classmethod
    def _reject_single_string(cls, value: Any) -> Any:
        if isinstance(value, (str, bytes)):
            raise ValueError("expected a collection of property names, not a single string")
        return value

    def summary(self) -> dict[str, Any]:
        """Log-friendly view of the options (callables shown by name)"""
        def _describe(spec: Any) -> Any:
            if spec is None or isinstance(spec, str):
                return spec
            return getattr(spec, "__qualname__", repr(spec))

        return {
            "include_protected_properties": self.include_protected_properties,
            "include_null_values": self.include_null_values,
            "property_callback": _describe(self.property_callback),
            "ignored_properties": sorted(self.ignored_properties),
            "convert_properties_to_snake_case": self.convert_properties_to_snake_case,
            "case_converter_function": _describe(self.case_converter_function),
            "ignore_sql_behavioural_properties": self.ignore_sql_behavioural_properties,
        }
