"""cqlstruct: typed records ↔ column store mappings.

Translates pydantic models and dataclasses to and from the generic
key/value mappings a column store client reads and writes, and infers the
store's native column type for any value.

Example:
    from typing import Annotated
    from uuid import UUID, uuid4

    from cqlstruct import Key, Record, type_name, wire_value

    class Tag(Record):
        label: str

    class Post(Record):
        id: Annotated[UUID, Key("post_id")]
        tags: list[Tag] = []

    post = Post(id=uuid4(), tags=[Tag(label="python")])
    row = {key: wire_value(value) for key, value in post.to_mapping().items()}
    # {"post_id": UUID(...), "tags": ['{"label":"python"}']}

    type_name(post.tags)          # "list<varchar>"
    Post.from_mapping(row).tags   # [Tag(label="python")]
"""

from cqlstruct.config import (
    DecodePolicy,
    Settings,
    configure,
    get_settings,
    reset_settings,
)
from cqlstruct.core import (
    BigInt,
    ColumnType,
    Counter,
    Float32,
    Int32,
    NativeType,
    classify,
    classify_type,
    infer,
    infer_type,
    type_name,
    type_name_of,
    wire_value,
    wire_values,
)
from cqlstruct.exceptions import (
    CqlStructError,
    EncodingError,
    NotARecordError,
    ShapeError,
    TranslationError,
    TypeMismatchError,
    UnnamedTypeError,
    UnsupportedTypeError,
)
from cqlstruct.records import (
    FieldInfo,
    Key,
    Record,
    ShapeMetadata,
    clear_registry,
    fields_and_values,
    get_shape_metadata,
    mapping_to_struct,
    schema_of,
    struct_to_mapping,
)

__all__ = [
    # Records
    "Record",
    "Key",
    "FieldInfo",
    "ShapeMetadata",
    "get_shape_metadata",
    "clear_registry",
    "schema_of",
    # Translation
    "struct_to_mapping",
    "mapping_to_struct",
    "fields_and_values",
    # Inference
    "NativeType",
    "ColumnType",
    "Int32",
    "BigInt",
    "Float32",
    "Counter",
    "infer",
    "infer_type",
    "classify",
    "classify_type",
    "type_name",
    "type_name_of",
    "wire_value",
    "wire_values",
    # Config
    "DecodePolicy",
    "Settings",
    "configure",
    "get_settings",
    "reset_settings",
    # Exceptions
    "CqlStructError",
    "ShapeError",
    "NotARecordError",
    "TranslationError",
    "TypeMismatchError",
    "UnnamedTypeError",
    "UnsupportedTypeError",
    "EncodingError",
]
