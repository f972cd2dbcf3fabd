"""
Key Functions
Case converters and key callbacks addressable by name

A function spec is either a callable or a string "name|arg2|arg3". The
first segment names the function; the remaining segments are passed as
extra positional arguments after the key, so "replace|-|_" calls
replace(key, "-", "_").
"""

import importlib
import re
from typing import Any, Callable, Optional

import structlog

from .errors import CallableResolutionError

logger = structlog.get_logger()

SPEC_SEPARATOR = "|"

FUNCTION_REGISTRY: dict[str, Callable[..., Any]] = {}

# "XMLParser" -> "XML_Parser"
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
# "userName" -> "user_Name", "item2Id" -> "item2_Id"
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_UPPER = re.compile(r"(?<!^)([A-Z])")
_SPACING = re.compile(r"[\s\-]+")
_DELIMITERS = re.compile(r"[\s\-_]+")


def register_function(name: Optional[str] = None):
    """Decorator registering a key function under `name` (defaults to its __name__)"""
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        FUNCTION_REGISTRY[name or func.__name__] = func
        return func
    return decorator


def parse_spec(spec: str) -> tuple[str, list[str]]:
    """Split "name|arg2|arg3" into ("name", ["arg2", "arg3"])"""
    name, *args = spec.split(SPEC_SEPARATOR)
    return name.strip(), args


def resolve_function(name: str) -> Callable[..., Any]:
    """
    Look a function up by name.

    Registered names win; otherwise `name` is treated as a dotted import
    path ("package.module.func" or "package.module:func").

    Raises:
        CallableResolutionError: nothing callable is found under `name`
    """
    func = FUNCTION_REGISTRY.get(name)
    if func is not None:
        return func

    func = _import_callable(name)
    if func is None:
        logger.error("Key function not found", function=name)
        raise CallableResolutionError(name)
    return func


def bind_spec(spec: Any) -> tuple[Callable[..., Any], list[str]]:
    """Resolve a string spec to (function, extra_args); callables pass through"""
    if isinstance(spec, str):
        name, args = parse_spec(spec)
        return resolve_function(name), args
    return spec, []


def _import_callable(path: str) -> Optional[Callable[..., Any]]:
    if ":" in path:
        module_name, _, attr = path.partition(":")
    else:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        return None

    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None

    target: Any = module
    for part in attr.split("."):
        target = getattr(target, part, None)
        if target is None:
            return None
    return target if callable(target) else None


# =============================================================================
# Built-in key functions (key is always the first argument)
# =============================================================================

@register_function()
def snake_case_safe(key: Any, separator: str = "_") -> str:
    """
    Delimiter-separated lowercase form that never double-delimits.

    userName -> user_name, userID -> user_id, XMLParser -> xml_parser,
    first_name -> first_name, "first name" -> first_name
    """
    text = str(key)
    if not text:
        return text

    text = _SPACING.sub(separator, text.strip())
    text = _ACRONYM_BOUNDARY.sub(lambda m: f"{m.group(1)}{separator}{m.group(2)}", text)
    text = _WORD_BOUNDARY.sub(lambda m: f"{m.group(1)}{separator}{m.group(2)}", text)
    return text.lower()


@register_function()
def snake_case(key: Any, separator: str = "_") -> str:
    """Separator before every upper case letter: userID -> user_i_d"""
    text = _UPPER.sub(lambda m: f"{separator}{m.group(1)}", str(key))
    return text.lower()


@register_function()
def kebab_case(key: Any) -> str:
    return snake_case_safe(key, "-")


@register_function()
def camel_case(key: Any) -> str:
    """first_name -> firstName"""
    studly = studly_case(key)
    return studly[:1].lower() + studly[1:]


@register_function()
def studly_case(key: Any) -> str:
    """first_name -> FirstName"""
    words = _DELIMITERS.split(snake_case_safe(key))
    return "".join(word[:1].upper() + word[1:] for word in words if word)


@register_function()
def lower(key: Any) -> str:
    return str(key).lower()


@register_function()
def upper(key: Any) -> str:
    return str(key).upper()


@register_function()
def replace(key: Any, search: str, replacement: str = "") -> str:
    return str(key).replace(search, replacement)


@register_function()
def prefix(key: Any, text: str) -> str:
    return f"{text}{key}"


@register_function()
def suffix(key: Any, text: str) -> str:
    return f"{key}{text}"
