"""Tests for record shape description and key resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated

import pytest
from pydantic import BaseModel, Field

from cqlstruct import Key, Record, ShapeError
from cqlstruct.exceptions import NotARecordError
from cqlstruct.records.registry import clear_registry, get_shape_metadata
from cqlstruct.records.shape import (
    FieldSpec,
    build_metadata,
    describe_shape,
    is_record,
    is_record_type,
    resolve_key,
)


@pytest.fixture(autouse=True)
def cleanup_registry():
    """Clean up registry before and after each test."""
    clear_registry()
    yield
    clear_registry()


class Profile(Record):
    """Model covering every way of declaring a key."""

    id: Annotated[int, Key("user_id")]
    name: Annotated[str, "display"]
    email: str
    nickname: Annotated[str, 'json:"nick"'] = ""
    password: str = Field(default="", exclude=True)


@dataclass
class Event:
    """Dataclass with metadata keys and a private field."""

    kind: str = field(metadata={"cql": "event_kind"})
    payload: Annotated[str, Key("body")] = ""
    count: int = 0
    _cursor: int = 0


class TestKeyResolution:
    """Test how field keys are derived."""

    def test_explicit_key_marker(self):
        """Test Key() wins over the attribute name."""
        metadata = get_shape_metadata(Profile)
        assert metadata.ordered[0].key == "user_id"
        assert metadata.ordered[0].name == "id"

    def test_bare_tag_text(self):
        """Test a bare string without key:value syntax is the key."""
        metadata = get_shape_metadata(Profile)
        assert metadata.ordered[1].key == "display"

    def test_attribute_name_fallback(self):
        """Test fields without tags use their attribute name."""
        metadata = get_shape_metadata(Profile)
        assert metadata.ordered[2].key == "email"

    def test_structured_tag_text_ignored(self):
        """Test tag text containing ':' belongs to another consumer."""
        metadata = get_shape_metadata(Profile)
        assert metadata.ordered[3].key == "nickname"

    def test_empty_explicit_key_falls_back(self):
        """Test an empty Key() does not hide the tag text or the name."""
        spec = FieldSpec(name="Field", ordinal=0, annotation=int, key="", raw_tag="myName")
        assert resolve_key(spec) == "myName"
        spec = FieldSpec(name="Field", ordinal=0, annotation=int, key="")
        assert resolve_key(spec) == "Field"

    def test_dataclass_metadata_key(self):
        """Test dataclass field(metadata={'cql': ...}) declares the key."""
        metadata = get_shape_metadata(Event)
        assert metadata.keys == ("event_kind", "body", "count", "_cursor")

    def test_declaration_order_and_ordinals(self):
        """Test ordered follows declaration order with matching ordinals."""
        metadata = get_shape_metadata(Profile)
        assert [info.ordinal for info in metadata.ordered] == [0, 1, 2, 3, 4]
        assert metadata.keys == ("user_id", "display", "email", "nickname", "password")


class TestVisibility:
    """Test exported/unexported field detection."""

    def test_pydantic_excluded_field_not_exported(self):
        """Test Field(exclude=True) marks the field unexported."""
        metadata = get_shape_metadata(Profile)
        assert metadata.lookup("password").exported is False
        assert "password" not in [info.key for info in metadata.exported]

    def test_dataclass_private_field_not_exported(self):
        """Test underscore-prefixed dataclass fields are unexported."""
        metadata = get_shape_metadata(Event)
        assert metadata.lookup("_cursor").exported is False
        assert metadata.lookup("count").exported is True


class TestLookup:
    """Test case-insensitive key lookup."""

    def test_lookup_ignores_case(self):
        """Test lookups match regardless of case."""
        metadata = get_shape_metadata(Profile)
        assert metadata.lookup("USER_ID") is metadata.lookup("user_id")
        assert metadata.lookup("Display").name == "name"

    def test_lookup_unknown_key(self):
        """Test unknown keys return None."""
        metadata = get_shape_metadata(Profile)
        assert metadata.lookup("nonexistent") is None

    def test_by_key_is_read_only(self):
        """Test the key index cannot be mutated."""
        metadata = get_shape_metadata(Profile)
        with pytest.raises(TypeError):
            metadata.by_key["other"] = metadata.ordered[0]


class TestDuplicateKeys:
    """Test rejection of keys that collide case-insensitively."""

    def test_case_insensitive_collision(self):
        """Test two keys differing only by case raise ShapeError."""

        class Clash(BaseModel):
            name: str
            other: Annotated[str, Key("NAME")]

        with pytest.raises(ShapeError, match="Duplicated key 'NAME'"):
            get_shape_metadata(Clash)

    def test_collision_with_unexported_field(self):
        """Test unexported fields still take part in collision checks."""
        specs = (
            FieldSpec(name="a", ordinal=0, annotation=int, key="Key"),
            FieldSpec(name="_b", ordinal=1, annotation=int, key="key", exported=False),
        )
        with pytest.raises(ShapeError):
            build_metadata(Event, specs)

    def test_unresolvable_annotation(self):
        """Test a dataclass with an unresolvable forward ref fails fast."""

        class Local:
            pass

        @dataclass
        class LocalRow:
            id: Annotated[int, Key("row_id")]
            extra: Local | None = None

        with pytest.raises(ShapeError, match="Local"):
            get_shape_metadata(LocalRow)

    def test_failed_shape_not_cached(self):
        """Test a broken shape fails again on every access."""

        class Clash(BaseModel):
            value: int
            VALUE: int

        for _ in range(2):
            with pytest.raises(ShapeError):
                get_shape_metadata(Clash)


class TestRecordDetection:
    """Test record type guards."""

    def test_record_instances(self):
        """Test pydantic and dataclass instances are records."""
        assert is_record(Profile(id=1, name="a", email="b"))
        assert is_record(Event(kind="x"))

    def test_classes_are_not_records(self):
        """Test record classes themselves are not record instances."""
        assert not is_record(Profile)
        assert is_record_type(Profile)
        assert is_record_type(Event)

    def test_plain_values_are_not_records(self):
        """Test builtins are not records."""
        for value in (1, "x", {"a": 1}, [1], None):
            assert not is_record(value)

    def test_describe_non_record(self):
        """Test describe_shape() rejects non-record classes."""
        with pytest.raises(NotARecordError):
            describe_shape(dict)

    def test_describe_returns_specs(self):
        """Test describe_shape() reports tags and annotations."""
        specs = describe_shape(Event)
        assert specs[0] == FieldSpec(
            name="kind", ordinal=0, annotation=str, key="event_kind", exported=True
        )
        assert specs[1].key == "body"
        assert specs[1].annotation is str
