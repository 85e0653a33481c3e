"""Translation between records and plain key/value mappings.

Functions:
    struct_to_mapping(record) -> (dict | None, ok):
        Exported fields keyed by their record key. Non-records give
        (None, False) rather than an error.

    fields_and_values(record) -> (keys | None, values | None, ok):
        Same data as struct_to_mapping() as two parallel lists in
        declaration order.

    Fields never assigned (a model_construct() instance built from a
    partial mapping) are left out of both.

    mapping_to_struct(mapping, record, decode_policy=None):
        Assign mapping values onto an existing record, in place.

Assignment rules (first match wins):
    1. list → list[T], every element already a T   → assigned as-is
    2. list → list[T], elements of T's builtin kind  → T(element) for each
    3. list[str] → list[T], T not str               → each string decoded
                                                       as JSON into a T
    4. value type name == field type name           → assigned as-is
    5. value type name == field type's kind name    → field_type(value)
    6. anything else                                → TypeMismatchError

    class Level(IntEnum):
        LOW = 1
        HIGH = 2

    class Alert(Record):
        level: Level
        tags: list[Level]

    alert = Alert.model_construct()
    mapping_to_struct({"level": 2, "tags": [1, 2]}, alert)
    alert.level  →  Level.HIGH          (rule 5)
    alert.tags   →  [Level.LOW, Level.HIGH]  (rule 2)

Keys not declared by the record are ignored. The first failing value aborts
the call; values assigned before it stay assigned.

JSON element decoding (rule 3) follows the decode policy: under LENIENT,
strings that fail to decode are dropped and the list comes back shorter
than the source.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, get_origin

from pydantic import BaseModel

from cqlstruct.config import DecodePolicy, get_settings
from cqlstruct.core.codec import decode_json, get_type_adapter
from cqlstruct.core.utils import (
    _is_unconstrained,
    _kind_of,
    _list_element,
    _strip,
    _type_name,
)
from cqlstruct.exceptions import (
    EncodingError,
    NotARecordError,
    TypeMismatchError,
    UnnamedTypeError,
)
from cqlstruct.records.registry import get_shape_metadata
from cqlstruct.records.shape import FieldInfo, is_record

logger = logging.getLogger(__name__)

# Fields never assigned on a model_construct()-built instance.
_UNSET = object()


def struct_to_mapping(record: Any) -> tuple[dict[str, Any] | None, bool]:
    """Return the exported fields of ``record`` keyed by their record key."""
    if not is_record(record):
        return None, False
    metadata = get_shape_metadata(type(record))
    mapping = {}
    for info in metadata.exported:
        value = getattr(record, info.name, _UNSET)
        if value is not _UNSET:
            mapping[info.key] = value
    return mapping, True


def fields_and_values(record: Any) -> tuple[list[str] | None, list[Any] | None, bool]:
    """Return parallel lists of keys and values in declaration order."""
    if not is_record(record):
        return None, None, False
    metadata = get_shape_metadata(type(record))
    keys: list[str] = []
    values: list[Any] = []
    for info in metadata.exported:
        value = getattr(record, info.name, _UNSET)
        if value is _UNSET:
            continue
        keys.append(info.key)
        values.append(value)
    return keys, values, True


def mapping_to_struct(
    mapping: Mapping[str, Any],
    record: Any,
    *,
    decode_policy: DecodePolicy | str | None = None,
) -> None:
    """Assign the values of ``mapping`` onto ``record`` in place.

    Raises:
        NotARecordError: ``record`` is not a pydantic model or dataclass instance.
        TypeMismatchError: a value cannot be assigned to its field.
        UnnamedTypeError: a field annotation has no nameable type.
        EncodingError: a JSON element failed to decode under STRICT policy.
    """
    if not is_record(record):
        raise NotARecordError(
            f"Cannot assign mapping to {type(record).__name__}: not a record instance"
        )
    shape = type(record)
    metadata = get_shape_metadata(shape)
    policy = _resolve_policy(shape, decode_policy)
    for key, value in mapping.items():
        info = metadata.lookup(key)
        if info is None or not info.exported:
            continue
        _assign(record, info.name, _convert(info, value, policy))


def _resolve_policy(shape: type, explicit: DecodePolicy | str | None) -> DecodePolicy:
    if explicit is not None:
        return DecodePolicy(explicit)
    meta = getattr(shape, "Meta", None)
    configured = getattr(meta, "decode_policy", None)
    if configured is not None:
        return DecodePolicy(configured)
    return get_settings().decode_policy


def _assign(record: Any, name: str, value: Any) -> None:
    # Bypass validate_assignment/frozen: the rules above already decided.
    if isinstance(record, BaseModel):
        record.__dict__[name] = value
        record.__pydantic_fields_set__.add(name)
    else:
        object.__setattr__(record, name, value)


def _convert(info: FieldInfo, value: Any, policy: DecodePolicy) -> Any:
    target, nullable = _strip(info.annotation)
    if value is None and nullable:
        return value

    is_list, element = _list_element(target)
    if is_list and isinstance(value, list):
        return _convert_list(info, element, value, policy)

    target_name = _type_name(target)
    if target_name is None:
        raise UnnamedTypeError(
            f"Field '{info.name}' has no nameable type ({target!r}) "
            f"to assign {type(value).__name__} to"
        )
    source_name = type(value).__name__
    if target_name == source_name:
        return value
    kind = _kind_of(target)
    if kind is not None and kind.__name__ == source_name:
        try:
            return target(value)
        except (TypeError, ValueError) as exc:
            raise TypeMismatchError(
                f"Cannot convert {value!r} to {target_name} for field '{info.name}': {exc}"
            ) from exc
    raise _mismatch(info, target_name, source_name)


def _convert_list(
    info: FieldInfo,
    element: Any,
    value: list[Any],
    policy: DecodePolicy,
) -> list[Any]:
    if not value or _is_unconstrained(element):
        return value

    source_types = {type(item) for item in value}
    source_type = source_types.pop() if len(source_types) == 1 else None
    if source_type is not None:
        if source_type is element or source_type is get_origin(element):
            return value

        source_kind = _kind_of(source_type)
        if source_kind is not None and source_kind is _kind_of(element):
            try:
                return [element(item) for item in value]
            except (TypeError, ValueError) as exc:
                raise TypeMismatchError(
                    f"Cannot convert elements of field '{info.name}' to "
                    f"{element.__name__}: {exc}"
                ) from exc

        if source_type is str and element is not str:
            return _decode_elements(info, element, value, policy)

    source_names = " | ".join(sorted({type(item).__name__ for item in value}))
    target_name = _type_name(element) or repr(element)
    raise _mismatch(info, f"list[{target_name}]", f"list[{source_names}]")


def _decode_elements(
    info: FieldInfo,
    element: Any,
    value: list[str],
    policy: DecodePolicy,
) -> list[Any]:
    get_type_adapter(element)
    result = []
    for index, text in enumerate(value):
        try:
            result.append(decode_json(text, element))
        except EncodingError:
            if policy is DecodePolicy.STRICT:
                raise
            logger.debug(
                "Dropped element %d of field '%s': not a JSON %s",
                index,
                info.name,
                _type_name(element) or element,
            )
    return result


def _mismatch(info: FieldInfo, target_name: str, source_name: str) -> TypeMismatchError:
    return TypeMismatchError(
        f"Unhandled type pair for field '{info.name}': {target_name} with {source_name}"
    )


__all__ = [
    "struct_to_mapping",
    "fields_and_values",
    "mapping_to_struct",
]
