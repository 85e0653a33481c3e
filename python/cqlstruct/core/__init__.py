"""Native column types and value inference.

This package has no knowledge of records: it classifies arbitrary values
(and annotations) into the store's native column types and prepares them
for the wire.
"""

from .inference import (
    ColumnType,
    classify,
    classify_type,
    infer,
    infer_type,
    type_name,
    type_name_of,
    wire_value,
    wire_values,
)
from .types import BigInt, Counter, Float32, Int32, NativeType

__all__ = [
    "NativeType",
    "Int32",
    "BigInt",
    "Float32",
    "Counter",
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
