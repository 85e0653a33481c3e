"""Native column types and the Python type registry.

NativeType is the closed set of column types the store understands, plus
CUSTOM for anything that has to travel as JSON text.

TYPE_REGISTRY maps Python types to their NativeType by exact type() lookup,
so bool never lands in the int bucket. KIND_REGISTRY is consulted only when
the exact lookup misses: it matches subclasses (IntEnum, str subclasses,
user-defined int types) by their builtin base, in declaration order.

Marker types:
    Int32, BigInt, Float32 and Counter are thin subclasses of int/float that
    let application code pick the column type Python's own numbers cannot
    express:

        class Page(Record):
            views: Counter
            total: BigInt
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID


class NativeType(Enum):
    """Column types understood by the store."""

    INT = "int"
    BIGINT = "bigint"
    VARCHAR = "varchar"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    UUID = "uuid"
    BLOB = "blob"
    COUNTER = "counter"
    CUSTOM = "custom"  # not a column type: stored as varchar JSON text

    @property
    def schema_name(self) -> str:
        """Schema name with CUSTOM folded into its varchar text fallback."""
        if self is NativeType.CUSTOM:
            return NativeType.VARCHAR.value
        return self.value


class Int32(int):
    """Integer declared as a 32-bit ``int`` column."""


class BigInt(int):
    """Integer declared as a 64-bit ``bigint`` column."""


class Float32(float):
    """Float declared as a single precision ``float`` column."""


class Counter(int):
    """Integer declared as a ``counter`` column."""


TYPE_REGISTRY: dict[type, NativeType] = {
    int: NativeType.INT,
    Int32: NativeType.INT,
    BigInt: NativeType.BIGINT,
    str: NativeType.VARCHAR,
    Float32: NativeType.FLOAT,
    float: NativeType.DOUBLE,
    bool: NativeType.BOOLEAN,
    datetime: NativeType.TIMESTAMP,
    UUID: NativeType.UUID,
    bytes: NativeType.BLOB,
    bytearray: NativeType.BLOB,
    memoryview: NativeType.BLOB,
    Counter: NativeType.COUNTER,
}

# Subclasses before their bases: bool and BigInt before int, Float32 before float.
KIND_REGISTRY: tuple[tuple[type, NativeType], ...] = (
    (bool, NativeType.BOOLEAN),
    (BigInt, NativeType.BIGINT),
    (int, NativeType.INT),
    (Float32, NativeType.FLOAT),
    (float, NativeType.DOUBLE),
    (str, NativeType.VARCHAR),
    (bytes, NativeType.BLOB),
    (bytearray, NativeType.BLOB),
)

BYTE_TYPES: tuple[type, ...] = (bytes, bytearray, memoryview)


def lookup_native(python_type: type) -> NativeType:
    """Return the NativeType for a class: exact match, then kind, then CUSTOM."""
    native = TYPE_REGISTRY.get(python_type)
    if native is not None:
        return native
    for base, kind_native in KIND_REGISTRY:
        if issubclass(python_type, base):
            return kind_native
    return NativeType.CUSTOM


__all__ = [
    "NativeType",
    "Int32",
    "BigInt",
    "Float32",
    "Counter",
    "TYPE_REGISTRY",
    "KIND_REGISTRY",
    "BYTE_TYPES",
    "lookup_native",
]
