"""JSON text codec for values without a native column type.

Encoding goes through pydantic_core.to_json, which understands pydantic
models, dataclasses, datetimes, UUIDs, enums and the usual containers.
Decoding validates the JSON text against the target Python type through a
cached pydantic TypeAdapter in strict mode: "5", 1.0 and true are not
ints. Strict JSON validation still reads ISO datetimes and UUIDs from
JSON strings.
"""

from __future__ import annotations

import threading
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import PydanticSerializationError, to_json

from cqlstruct.exceptions import EncodingError

_TYPE_ADAPTER_CACHE: dict[Any, TypeAdapter[Any]] = {}
_TYPE_ADAPTER_LOCK = threading.Lock()


def get_type_adapter(target: Any) -> TypeAdapter[Any]:
    """Return the cached TypeAdapter for ``target``, creating it once."""
    adapter = _TYPE_ADAPTER_CACHE.get(target)
    if adapter is not None:
        return adapter
    with _TYPE_ADAPTER_LOCK:
        # Double-check after acquiring lock
        adapter = _TYPE_ADAPTER_CACHE.get(target)
        if adapter is None:
            try:
                adapter = TypeAdapter(target)
            except PydanticSchemaGenerationError as exc:
                raise EncodingError(
                    f"Cannot decode JSON into {_describe(target)}: {exc}"
                ) from exc
            _TYPE_ADAPTER_CACHE[target] = adapter
    return adapter


def encode_json(value: Any) -> str:
    """Serialize ``value`` to JSON text."""
    try:
        return to_json(value).decode("utf-8")
    except (PydanticSerializationError, ValueError) as exc:
        raise EncodingError(
            f"Cannot encode value of type {type(value).__name__} as JSON: {exc}"
        ) from exc


def decode_json(text: str | bytes, target: Any) -> Any:
    """Parse JSON ``text`` into an instance of ``target``."""
    adapter = get_type_adapter(target)
    try:
        return adapter.validate_json(text, strict=True)
    except ValidationError as exc:
        raise EncodingError(
            f"Cannot decode {text!r} as {_describe(target)}: "
            f"{exc.error_count()} validation error(s)"
        ) from exc


def clear_adapter_cache() -> None:
    """Drop cached TypeAdapters (intended for tests)."""
    with _TYPE_ADAPTER_LOCK:
        _TYPE_ADAPTER_CACHE.clear()


def _describe(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


__all__ = [
    "get_type_adapter",
    "encode_json",
    "decode_json",
    "clear_adapter_cache",
]
