"""Record shapes: field descriptors and the keys they expose.

A record shape is a pydantic model class or a dataclass. Each declared
field exposes one key in mappings produced from (or applied to) records:

    class User(Record):
        # key "user_id": explicit Key marker
        id: Annotated[int, Key("user_id")]

        # key "display": bare tag text without "key:value" syntax
        name: Annotated[str, "display"]

        # key "email": the attribute name
        email: str

Dataclasses may also declare the key through field metadata:

    @dataclass
    class Event:
        kind: str = field(metadata={"cql": "event_kind"})

Keys are matched case-insensitively, so two keys in one shape that differ
only by case are a broken declaration and raise ShapeError.

Visibility:
    Dataclass fields whose names start with an underscore and pydantic
    fields declared with Field(exclude=True) are not exported: they are
    never emitted by struct_to_mapping() and never assigned by
    mapping_to_struct(), but their keys still count for collisions.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, get_type_hints

from pydantic import BaseModel

from cqlstruct.core.utils import _unpack_annotated
from cqlstruct.exceptions import NotARecordError, ShapeError

TAG_METADATA_KEY = "cql"


@dataclass(frozen=True, slots=True)
class Key:
    """Explicit key for a record field, used inside Annotated[...]."""

    name: str


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Declared field as seen by the shape descriptor."""

    name: str
    ordinal: int
    annotation: Any
    key: str | None = None
    raw_tag: str | None = None
    exported: bool = True


@dataclass(frozen=True, slots=True)
class FieldInfo:
    """Resolved key of a record field and its position in the shape."""

    key: str
    ordinal: int
    name: str
    annotation: Any
    exported: bool = True


@dataclass(frozen=True, slots=True)
class ShapeMetadata:
    """Keys of one record shape, by lowercased key and in declaration order."""

    shape: type
    by_key: Mapping[str, FieldInfo]
    ordered: tuple[FieldInfo, ...]

    def lookup(self, key: str) -> FieldInfo | None:
        """Find a field by key, ignoring case."""
        return self.by_key.get(key.lower())

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(info.key for info in self.ordered)

    @property
    def exported(self) -> tuple[FieldInfo, ...]:
        return tuple(info for info in self.ordered if info.exported)


def is_record_type(obj: Any) -> bool:
    """True for pydantic model classes and dataclass classes."""
    if not isinstance(obj, type):
        return False
    return issubclass(obj, BaseModel) or dataclasses.is_dataclass(obj)


def is_record(obj: Any) -> bool:
    """True for pydantic model and dataclass instances."""
    return not isinstance(obj, type) and is_record_type(type(obj))


def _tags_from_metadata(metadata: tuple[Any, ...] | list[Any]) -> tuple[str | None, str | None]:
    key: str | None = None
    raw_tag: str | None = None
    for item in metadata:
        if isinstance(item, Key) and key is None:
            key = item.name
        elif isinstance(item, str) and raw_tag is None:
            raw_tag = item
    return key, raw_tag


def _describe_model(shape: type[BaseModel]) -> tuple[FieldSpec, ...]:
    specs = []
    for ordinal, (name, field_info) in enumerate(shape.model_fields.items()):
        key, raw_tag = _tags_from_metadata(field_info.metadata)
        specs.append(
            FieldSpec(
                name=name,
                ordinal=ordinal,
                annotation=field_info.annotation,
                key=key,
                raw_tag=raw_tag,
                exported=field_info.exclude is not True,
            )
        )
    return tuple(specs)


def _describe_dataclass(shape: type) -> tuple[FieldSpec, ...]:
    try:
        hints = get_type_hints(shape, include_extras=True)
    except NameError as exc:
        # Key markers live inside the annotations: without them keys are unknown.
        raise ShapeError(
            f"Cannot resolve annotations of record {shape.__module__}.{shape.__qualname__}: {exc}"
        ) from exc
    specs = []
    for ordinal, dc_field in enumerate(dataclasses.fields(shape)):
        annotation, metadata = _unpack_annotated(hints[dc_field.name])
        key, raw_tag = _tags_from_metadata(metadata)
        explicit = dc_field.metadata.get(TAG_METADATA_KEY)
        if explicit:
            key = explicit
        specs.append(
            FieldSpec(
                name=dc_field.name,
                ordinal=ordinal,
                annotation=annotation,
                key=key,
                raw_tag=raw_tag,
                exported=not dc_field.name.startswith("_"),
            )
        )
    return tuple(specs)


def describe_shape(shape: type) -> tuple[FieldSpec, ...]:
    """Return the field descriptors of a record shape in declaration order."""
    if isinstance(shape, type) and issubclass(shape, BaseModel):
        return _describe_model(shape)
    if isinstance(shape, type) and dataclasses.is_dataclass(shape):
        return _describe_dataclass(shape)
    raise NotARecordError(f"{shape!r} is not a pydantic model or dataclass")


def resolve_key(spec: FieldSpec) -> str:
    """Explicit key, else bare tag text without "key:value" syntax, else the name."""
    if spec.key:
        return spec.key
    if spec.raw_tag and ":" not in spec.raw_tag:
        return spec.raw_tag
    return spec.name


def build_metadata(shape: type, specs: tuple[FieldSpec, ...]) -> ShapeMetadata:
    """Build the key metadata of a shape, rejecting case-insensitive duplicates."""
    by_key: dict[str, FieldInfo] = {}
    ordered: list[FieldInfo] = []
    for spec in specs:
        info = FieldInfo(
            key=resolve_key(spec),
            ordinal=spec.ordinal,
            name=spec.name,
            annotation=spec.annotation,
            exported=spec.exported,
        )
        lowered = info.key.lower()
        if lowered in by_key:
            raise ShapeError(
                f"Duplicated key '{info.key}' in record {shape.__module__}.{shape.__qualname__}"
            )
        by_key[lowered] = info
        ordered.append(info)
    return ShapeMetadata(
        shape=shape,
        by_key=MappingProxyType(by_key),
        ordered=tuple(ordered),
    )


__all__ = [
    "TAG_METADATA_KEY",
    "Key",
    "FieldSpec",
    "FieldInfo",
    "ShapeMetadata",
    "is_record_type",
    "is_record",
    "describe_shape",
    "resolve_key",
    "build_metadata",
]
