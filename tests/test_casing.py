"""Tests for serializer.normalize.casing."""
from __future__ import annotations

import pytest

from serializer.normalize import CallableResolutionError
from serializer.normalize.casing import (
    FUNCTION_REGISTRY,
    bind_spec,
    camel_case,
    kebab_case,
    parse_spec,
    register_function,
    resolve_function,
    snake_case,
    snake_case_safe,
    studly_case,
)


class TestSnakeCaseSafe:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("firstName", "first_name"),
            ("FirstName", "first_name"),
            ("userID", "user_id"),
            ("XMLParser", "xml_parser"),
            ("IPAddress", "ip_address"),
            ("first_name", "first_name"),
            ("first name", "first_name"),
            ("item2Count", "item2_count"),
            ("id", "id"),
            ("", ""),
        ],
    )
    def test_conversion(self, key: str, expected: str) -> None:
        assert snake_case_safe(key) == expected

    def test_custom_separator(self) -> None:
        assert snake_case_safe("firstName", "-") == "first-name"

    def test_non_string_key(self) -> None:
        assert snake_case_safe(3) == "3"

    def test_is_idempotent(self) -> None:
        once = snake_case_safe("someHTTPResponseCode")
        assert once == "some_http_response_code"
        assert snake_case_safe(once) == once


class TestOtherConverters:
    def test_naive_snake_case_splits_every_capital(self) -> None:
        assert snake_case("userID") == "user_i_d"
        assert snake_case("firstName") == "first_name"

    def test_kebab_case(self) -> None:
        assert kebab_case("firstName") == "first-name"

    def test_camel_case(self) -> None:
        assert camel_case("first_name") == "firstName"
        assert camel_case("FirstName") == "firstName"

    def test_studly_case(self) -> None:
        assert studly_case("first_name") == "FirstName"


class TestResolution:
    def test_parse_spec(self) -> None:
        assert parse_spec("replace|-|_") == ("replace", ["-", "_"])
        assert parse_spec("lower") == ("lower", [])

    def test_registered_function(self) -> None:
        assert resolve_function("snake_case_safe") is snake_case_safe

    def test_dotted_path(self) -> None:
        import string

        assert resolve_function("string.capwords") is string.capwords

    def test_non_callable_path_not_found(self) -> None:
        with pytest.raises(CallableResolutionError):
            resolve_function("string.ascii_letters")

    def test_missing_module_not_found(self) -> None:
        with pytest.raises(CallableResolutionError) as exc_info:
            resolve_function("no_such_module.func")
        assert "no_such_module.func" in str(exc_info.value)

    def test_bind_spec_passes_callables_through(self) -> None:
        assert bind_spec(str.lower) == (str.lower, [])

    def test_bind_spec_string(self) -> None:
        func, args = bind_spec("snake_case_safe|-")
        assert func is snake_case_safe
        assert args == ["-"]

    def test_register_function(self) -> None:
        @register_function("shout")
        def _shout(key):
            return f"{key}!"

        try:
            func, args = bind_spec("shout")
            assert func("hey", *args) == "hey!"
        finally:
            FUNCTION_REGISTRY.pop("shout", None)
