"""Native column type inference for runtime values and annotations.

Every value falls into one of three shapes:
    scalar  → its NativeType              "int", "varchar", ...
    list    → list of its element type    "list<int>"
    map     → key and value types         "map<varchar, double>"

Scalars and list elements without a native type are CUSTOM: they are stored
as varchar holding JSON text, so a list of dataclasses becomes
"list<varchar>" and travels as a list of JSON strings. Map components have
no such fallback and raise UnsupportedTypeError.

Byte strings (bytes, bytearray, memoryview) are blobs, never lists.

Lists are assumed homogeneous: the element type is the type of the first
non-None element. Empty lists have no element evidence and classify as
CUSTOM (list<varchar>); empty dicts cannot be named as a map.

Usage:
    classify(42)                     → NativeType.INT
    type_name([Point(1, 2)])         → "list<varchar>"
    wire_value([Point(1, 2)])        → ['{"x":1,"y":2}']
    type_name_of(dict[str, float])   → "map<varchar, double>"
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Literal, get_args, get_origin

from cqlstruct.core.codec import encode_json
from cqlstruct.core.types import BYTE_TYPES, NativeType, lookup_native
from cqlstruct.core.utils import _strip
from cqlstruct.exceptions import UnsupportedTypeError

Container = Literal["list", "map"]


@dataclass(frozen=True, slots=True)
class ColumnType:
    """Inferred column type: a scalar, a list of scalars or a map of scalars."""

    native: NativeType
    container: Container | None = None
    key: NativeType | None = None

    @property
    def is_custom(self) -> bool:
        return self.native is NativeType.CUSTOM or self.key is NativeType.CUSTOM

    @property
    def schema_name(self) -> str:
        """Schema type string, e.g. ``bigint`` or ``map<varchar, int>``."""
        if self.container == "list":
            return f"list<{self.native.schema_name}>"
        if self.container == "map":
            self.check_map()
            return f"map<{self.key.value}, {self.native.value}>"
        return self.native.schema_name

    def check_map(self) -> None:
        if self.container == "map" and self.is_custom:
            key = self.key.value if self.key is not None else "?"
            raise UnsupportedTypeError(
                f"Unsupported map key or value type: map<{key}, {self.native.value}>"
            )


def _native_of_class(tp: Any) -> NativeType:
    if isinstance(tp, type):
        return lookup_native(tp)
    return NativeType.CUSTOM


def _first_element_native(values: Iterable[Any]) -> NativeType:
    for item in values:
        if item is not None:
            return lookup_native(type(item))
    return NativeType.CUSTOM


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and not isinstance(value, BYTE_TYPES)


def infer(value: Any) -> ColumnType:
    """Infer the column type of a runtime value without validating maps."""
    if isinstance(value, BYTE_TYPES):
        return ColumnType(NativeType.BLOB)
    if _is_sequence(value):
        return ColumnType(_first_element_native(value), "list")
    if isinstance(value, dict):
        return ColumnType(
            _first_element_native(value.values()),
            "map",
            key=_first_element_native(value.keys()),
        )
    return ColumnType(lookup_native(type(value)))


def infer_type(tp: Any) -> ColumnType:
    """Infer the column type of an annotation such as ``list[int]``."""
    tp, _ = _strip(tp)
    origin = get_origin(tp)
    args = get_args(tp)
    if tp in (list, tuple) or origin in (list, tuple):
        element = _strip(args[0])[0] if args else Any
        return ColumnType(_native_of_class(element), "list")
    if tp is dict or origin is dict:
        key, element = (args[0], args[1]) if len(args) == 2 else (Any, Any)
        return ColumnType(
            _native_of_class(_strip(element)[0]),
            "map",
            key=_native_of_class(_strip(key)[0]),
        )
    return ColumnType(_native_of_class(tp))


def classify(value: Any) -> NativeType:
    """Return the NativeType of a value.

    Lists classify by their element type. Maps classify by their value type
    once both key and value are known to be native.
    """
    column = infer(value)
    column.check_map()
    return column.native


def classify_type(tp: Any) -> NativeType:
    """Annotation counterpart of classify()."""
    column = infer_type(tp)
    column.check_map()
    return column.native


def type_name(value: Any) -> str:
    """Return the schema type string for a value (CUSTOM renders as varchar)."""
    return infer(value).schema_name


def type_name_of(tp: Any) -> str:
    """Return the schema type string for an annotation."""
    return infer_type(tp).schema_name


def wire_value(value: Any) -> Any:
    """Return the value to send to the store.

    CUSTOM scalars become JSON text and lists of CUSTOM elements become
    lists of JSON text. Everything native passes through unchanged.
    """
    if value is None:
        return None
    column = infer(value)
    if column.container == "list":
        if column.native is NativeType.CUSTOM:
            return [encode_json(item) for item in value]
        return value
    if column.container == "map":
        if value:
            column.check_map()
        return value
    if column.native is NativeType.CUSTOM:
        return encode_json(value)
    return value


def wire_values(values: Iterable[Any]) -> list[Any]:
    """Apply wire_value() to each value, e.g. the values of fields_and_values()."""
    return [wire_value(value) for value in values]


__all__ = [
    "ColumnType",
    "infer",
    "infer_type",
    "classify",
    "classify_type",
    "type_name",
    "type_name_of",
    "wire_value",
    "wire_values",
]
