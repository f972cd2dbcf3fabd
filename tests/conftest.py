from datetime import datetime, timedelta, timezone

import pytest
import structlog

from serializer.normalize import reset_default_normalizer


class Address:
    def __init__(self, streetName: str, city: str = None):
        self.streetName = streetName
        self.city = city


class Account:
    """Record with one field of each visibility."""

    def __init__(self):
        self.displayName = "Ada"
        self._internalCode = "X-1"
        self.__passwordHash = "s3cret"


class Customer(Account):
    def __init__(self):
        super().__init__()
        self.address = Address("Main Street")
        self.createdAt = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone(timedelta(hours=3)))
        self.nickname = None


@pytest.fixture
def account() -> Account:
    return Account()


@pytest.fixture
def customer() -> Customer:
    return Customer()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "NORMALIZER_INCLUDE_PROTECTED_PROPERTIES",
        "NORMALIZER_INCLUDE_NULL_VALUES",
        "NORMALIZER_CONVERT_PROPERTIES_TO_SNAKE_CASE",
        "NORMALIZER_IGNORE_SQL_BEHAVIOURAL_PROPERTIES",
        "NORMALIZER_CASE_CONVERTER_FUNCTION",
        "NORMALIZER_PROPERTY_CALLBACK",
        "NORMALIZER_IGNORED_PROPERTIES",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_default_normalizer()
    yield
    reset_default_normalizer()
    structlog.reset_defaults()
