"""Tests for field-set extraction."""
from __future__ import annotations

from collections import namedtuple
from datetime import datetime
from pathlib import PurePosixPath
from uuid import UUID

from serializer.normalize.fields import is_record, is_structured, iter_fields, split_visibility
from shared.schemas import FieldVisibility

Point = namedtuple("Point", "x yValue")


class Base:
    def __init__(self):
        self.__token = "t"


class Child(Base):
    def __init__(self):
        super().__init__()
        self.__token = "c"
        self._cache = {}
        self.name = "n"


class TestSplitVisibility:
    def test_public(self) -> None:
        assert split_visibility("name", ("Child",)) == ("name", FieldVisibility.PUBLIC)

    def test_protected(self) -> None:
        assert split_visibility("_name", ("Child",)) == ("name", FieldVisibility.PROTECTED)

    def test_private_owner(self) -> None:
        assert split_visibility("_Child__name", ("Child", "Base")) == ("name", FieldVisibility.PRIVATE)

    def test_private_owner_with_leading_underscore_class(self) -> None:
        assert split_visibility("_Hidden__name", ("_Hidden",)) == ("name", FieldVisibility.PRIVATE)

    def test_foreign_mangled_name_is_protected(self) -> None:
        assert split_visibility("_Other__name", ("Child",)) == ("Other__name", FieldVisibility.PROTECTED)

    def test_lone_underscore_is_public(self) -> None:
        assert split_visibility("_", ("Child",)) == ("_", FieldVisibility.PUBLIC)


class TestIterFields:
    def test_record_fields_from_every_class(self) -> None:
        fields = [(f.name, f.visibility, f.value) for f in iter_fields(Child())]
        assert fields == [
            ("token", FieldVisibility.PRIVATE, "t"),
            ("token", FieldVisibility.PRIVATE, "c"),
            ("cache", FieldVisibility.PROTECTED, {}),
            ("name", FieldVisibility.PUBLIC, "n"),
        ]

    def test_mapping_keys_stringified(self) -> None:
        fields = [(f.name, f.visibility) for f in iter_fields({1: "a", "_b": "b"})]
        assert fields == [("1", FieldVisibility.PUBLIC), ("_b", FieldVisibility.PUBLIC)]

    def test_tuple_indexes(self) -> None:
        assert [(f.name, f.value) for f in iter_fields(("a", "b"))] == [("0", "a"), ("1", "b")]

    def test_namedtuple_field_names(self) -> None:
        fields = [(f.name, f.visibility, f.value) for f in iter_fields(Point(1, 2))]
        assert fields == [("x", FieldVisibility.PUBLIC, 1), ("yValue", FieldVisibility.PUBLIC, 2)]

    def test_scalar_has_no_fields(self) -> None:
        assert list(iter_fields(3.5)) == []
        assert list(iter_fields(datetime(2024, 1, 1))) == []


class TestStructured:
    def test_classification(self) -> None:
        assert is_structured({}) is True
        assert is_structured([]) is True
        assert is_structured(Child()) is True
        assert is_structured("text") is False
        assert is_structured(None) is False
        assert is_structured(datetime(2024, 1, 1)) is False

    def test_classes_are_not_records(self) -> None:
        assert is_record(Child) is False
        assert is_record(len) is False

    def test_uuid_and_paths_are_scalars(self) -> None:
        assert is_structured(UUID(int=5)) is False
        assert is_structured(PurePosixPath("/tmp/x")) is False
        assert list(iter_fields(UUID(int=5))) == []
