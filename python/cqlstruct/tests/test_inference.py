"""Tests for native type classification, schema names and wire values."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime
from enum import IntEnum
from typing import Annotated, Any
from uuid import uuid4

import pytest
from pydantic import BaseModel

from cqlstruct import (
    BigInt,
    ColumnType,
    Counter,
    EncodingError,
    Float32,
    Int32,
    Key,
    NativeType,
    UnsupportedTypeError,
    classify,
    classify_type,
    infer,
    infer_type,
    type_name,
    type_name_of,
    wire_value,
    wire_values,
)


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass
class Empty:
    pass


class Opaque:
    """Plain object with no JSON representation."""


class Priority(IntEnum):
    LOW = 1


class Slug(str):
    pass


class UserId(BigInt):
    pass


class Ratio(Float32):
    pass


class Note(BaseModel):
    text: str


class TestClassify:
    """Test the scalar classification table."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (42, NativeType.INT),
            (Int32(7), NativeType.INT),
            (BigInt(2**40), NativeType.BIGINT),
            ("x", NativeType.VARCHAR),
            (Float32(1.5), NativeType.FLOAT),
            (3.14, NativeType.DOUBLE),
            (True, NativeType.BOOLEAN),
            (datetime(2024, 1, 1), NativeType.TIMESTAMP),
            (uuid4(), NativeType.UUID),
            (b"\x01\x02", NativeType.BLOB),
            (bytearray(b"\x01"), NativeType.BLOB),
            (Counter(1), NativeType.COUNTER),
            (Empty(), NativeType.CUSTOM),
            (Point(1, 2), NativeType.CUSTOM),
            (date(2024, 1, 1), NativeType.CUSTOM),
        ],
    )
    def test_table(self, value, expected):
        """Test exact type matches."""
        assert classify(value) is expected

    def test_kind_fallback(self):
        """Test subclasses of builtins classify by their kind."""
        assert classify(Priority.LOW) is NativeType.INT
        assert classify(Slug("a-b")) is NativeType.VARCHAR

    def test_marker_subclasses_keep_kind(self):
        """Test subclasses of BigInt and Float32 keep their column type."""
        assert classify(UserId(5)) is NativeType.BIGINT
        assert type_name(UserId(5)) == "bigint"
        assert classify(Ratio(0.5)) is NativeType.FLOAT
        assert type_name([Ratio(0.5)]) == "list<float>"
        assert type_name_of(UserId) == "bigint"

    def test_bool_not_int(self):
        """Test bool is never classified as int."""
        assert classify(False) is NativeType.BOOLEAN

    def test_list_classifies_by_element(self):
        """Test lists classify by their first non-None element."""
        assert classify([1, 2]) is NativeType.INT
        assert classify([None, "a"]) is NativeType.VARCHAR
        assert classify((1.0, 2.0)) is NativeType.DOUBLE
        assert classify([Point(1, 2)]) is NativeType.CUSTOM
        assert classify([]) is NativeType.CUSTOM

    def test_bytes_not_a_list(self):
        """Test byte strings are blobs, not lists of ints."""
        assert infer(b"abc") == ColumnType(NativeType.BLOB)
        assert infer([b"abc"]) == ColumnType(NativeType.BLOB, "list")

    def test_map_classifies_by_value(self):
        """Test native maps classify by their value type."""
        assert classify({"a": 1.0}) is NativeType.DOUBLE

    def test_map_with_custom_component(self):
        """Test maps with non-native keys or values raise."""
        with pytest.raises(UnsupportedTypeError):
            classify({Point(1, 2): 1})
        with pytest.raises(UnsupportedTypeError):
            classify({"a": Point(1, 2)})


class TestTypeName:
    """Test schema type strings."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (42, "int"),
            (BigInt(1), "bigint"),
            ("x", "varchar"),
            (Float32(1.0), "float"),
            (1.0, "double"),
            (True, "boolean"),
            (datetime(2024, 1, 1), "timestamp"),
            (uuid4(), "uuid"),
            (b"x", "blob"),
            (Counter(0), "counter"),
            (Point(1, 2), "varchar"),
        ],
    )
    def test_scalars(self, value, expected):
        """Test scalar names, with custom values falling back to varchar."""
        assert type_name(value) == expected

    def test_lists(self):
        """Test list names wrap the element name."""
        assert type_name([1, 2]) == "list<int>"
        assert type_name([b"x"]) == "list<blob>"
        assert type_name([Point(1, 2), Point(3, 4)]) == "list<varchar>"
        assert type_name([[1], [2]]) == "list<varchar>"
        assert type_name([]) == "list<varchar>"

    def test_maps(self):
        """Test map names include key and value."""
        assert type_name({"a": 1}) == "map<varchar, int>"
        assert type_name({uuid4(): datetime(2024, 1, 1)}) == "map<uuid, timestamp>"

    def test_map_restriction(self):
        """Test maps with custom components have no name."""
        with pytest.raises(UnsupportedTypeError, match="map<custom, int>"):
            type_name({Point(1, 2): 1})
        with pytest.raises(UnsupportedTypeError):
            type_name({})

    def test_schema_name_folds_custom(self):
        """Test CUSTOM renders as varchar."""
        assert NativeType.CUSTOM.schema_name == "varchar"
        assert NativeType.BIGINT.schema_name == "bigint"


class TestAnnotations:
    """Test inference from type annotations."""

    def test_scalars(self):
        """Test plain classes and wrappers."""
        assert type_name_of(int) == "int"
        assert type_name_of(int | None) == "int"
        assert type_name_of(Annotated[BigInt, Key("total")]) == "bigint"
        assert type_name_of(bytes) == "blob"
        assert type_name_of(Note) == "varchar"
        assert type_name_of(Any) == "varchar"

    def test_lists(self):
        """Test list and tuple annotations."""
        assert type_name_of(list[int]) == "list<int>"
        assert type_name_of(list[Point]) == "list<varchar>"
        assert type_name_of(tuple[float, ...]) == "list<double>"
        assert type_name_of(list) == "list<varchar>"
        assert classify_type(list[Priority]) is NativeType.INT

    def test_maps(self):
        """Test dict annotations."""
        assert type_name_of(dict[str, float]) == "map<varchar, double>"
        assert infer_type(dict[str, int]) == ColumnType(
            NativeType.INT, "map", key=NativeType.VARCHAR
        )
        with pytest.raises(UnsupportedTypeError):
            type_name_of(dict[str, Point])
        with pytest.raises(UnsupportedTypeError):
            classify_type(dict)


class TestWireValue:
    """Test values prepared for the store."""

    def test_none(self):
        """Test None passes through."""
        assert wire_value(None) is None

    def test_native_passthrough(self):
        """Test native scalars, lists and maps are unchanged."""
        numbers = [1, 2]
        mapping = {"a": 1}
        blob = b"\x00"
        assert wire_value(42) == 42
        assert wire_value(numbers) is numbers
        assert wire_value(mapping) is mapping
        assert wire_value(blob) is blob

    def test_custom_scalar(self):
        """Test custom scalars become JSON text."""
        assert json.loads(wire_value(Point(1, 2))) == {"x": 1, "y": 2}
        assert json.loads(wire_value(Note(text="hi"))) == {"text": "hi"}
        assert wire_value(date(2024, 1, 2)) == '"2024-01-02"'

    def test_custom_list(self):
        """Test lists of custom elements become lists of JSON text."""
        points = [Point(1, 2), Point(3, 4), Point(5, 6)]
        result = wire_value(points)
        assert len(result) == len(points)
        assert all(isinstance(item, str) for item in result)
        assert [json.loads(item) for item in result] == [
            {"x": 1, "y": 2},
            {"x": 3, "y": 4},
            {"x": 5, "y": 6},
        ]

    def test_empty_containers(self):
        """Test empty lists and dicts have nothing to encode."""
        assert wire_value([]) == []
        assert wire_value({}) == {}

    def test_map_restriction(self):
        """Test maps with custom components are rejected."""
        with pytest.raises(UnsupportedTypeError):
            wire_value({Point(1, 2): 1})

    def test_encoding_failure(self):
        """Test unserializable values raise EncodingError."""
        with pytest.raises(EncodingError):
            wire_value(Opaque())

    def test_list_encoding_failure_aborts(self):
        """Test one bad element fails the whole list."""
        with pytest.raises(EncodingError):
            wire_value([Point(1, 2), Opaque()])

    def test_wire_values(self):
        """Test wire_values() maps over a sequence."""
        assert wire_values([1, Point(0, 0), None]) == [1, '{"x":0,"y":0}', None]
