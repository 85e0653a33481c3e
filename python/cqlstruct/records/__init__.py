"""Record shapes and their translation to store mappings.

Records are pydantic models or dataclasses. Each field exposes a key, taken
from a Key marker, a bare tag string or the attribute name:

    from typing import Annotated

    from cqlstruct import Key, Record

    class User(Record):
        id: Annotated[int, Key("user_id")]
        name: str

Functions:
    struct_to_mapping(): record → {key: value}
    mapping_to_struct(): {key: value} → record, in place
    fields_and_values(): record → ([keys], [values])
    schema_of(): record class → {key: schema type string}

Shape Cache:
    get_shape_metadata(): Keys of a record class, built once and cached.
    clear_registry(): Drop cached metadata (tests).
"""

from .base import Record
from .registry import (
    cached_shapes,
    clear_registry,
    get_shape_metadata,
    is_cached,
)
from .schema import schema_of
from .shape import (
    FieldInfo,
    FieldSpec,
    Key,
    ShapeMetadata,
    describe_shape,
    is_record,
    is_record_type,
)
from .translator import fields_and_values, mapping_to_struct, struct_to_mapping

__all__ = [
    "Record",
    "Key",
    "FieldSpec",
    "FieldInfo",
    "ShapeMetadata",
    "describe_shape",
    "is_record",
    "is_record_type",
    "get_shape_metadata",
    "is_cached",
    "cached_shapes",
    "clear_registry",
    "schema_of",
    "struct_to_mapping",
    "mapping_to_struct",
    "fields_and_values",
]
