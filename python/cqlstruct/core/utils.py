"""Type introspection utilities for record field and value annotations.

Functions:
    _unpack_annotated(hint) -> (base_type, metadata_tuple):
        Extract base type from Annotated[T, ...].
        Returns (hint, ()) if not Annotated.

        Annotated[int, Key("id")]  →  (int, (Key("id"),))

    _unwrap_optional(hint) -> (inner_type, is_optional):
        Check if type is Optional[T] or T | None.
        Returns (T, True) if nullable, (hint, False) otherwise.

        int | None  →  (int, True)
        str         →  (str, False)

    _list_element(hint) -> (is_list, element_type):
        list[T] → (True, T); bare list → (True, Any); anything else → (False, None).

    _type_name(hint) -> str | None:
        Name of a class, or of a generic alias' origin (dict[str, int] → "dict").
        None for Any, unions, type variables and other unnamed annotations.

    _kind_of(tp) -> type | None:
        Nearest builtin base (bool, int, float, str, bytes) in the MRO.

        IntEnum subclass  →  int
"""

from __future__ import annotations

from types import NoneType, UnionType
from typing import Annotated, Any, Union, get_args, get_origin

_KINDS: tuple[type, ...] = (bool, int, float, str, bytes)


def _unpack_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Extract base type and metadata from Annotated type hint."""
    if get_origin(hint) is Annotated:
        args = get_args(hint)
        if args:
            return args[0], tuple(args[1:])
    return hint, ()


def _unwrap_optional(hint: Any) -> tuple[Any, bool]:
    """Check if type is Optional/Union with None and extract base type."""
    origin = get_origin(hint)
    if origin in (Union, UnionType):
        args = []
        nullable = False
        for arg in get_args(hint):
            if arg is NoneType:
                nullable = True
            else:
                args.append(arg)
        if nullable and len(args) == 1:
            return args[0], True
    return hint, False


def _strip(hint: Any) -> tuple[Any, bool]:
    """Unpack Annotated and Optional wrappers in one go."""
    hint, _ = _unpack_annotated(hint)
    hint, nullable = _unwrap_optional(hint)
    hint, _ = _unpack_annotated(hint)
    return hint, nullable


def _list_element(hint: Any) -> tuple[bool, Any]:
    """Return whether ``hint`` is a list annotation and its element type."""
    if hint is list:
        return True, Any
    if get_origin(hint) is list:
        args = get_args(hint)
        element, _ = _strip(args[0]) if args else (Any, False)
        return True, element
    return False, None


def _type_name(hint: Any) -> str | None:
    """Return the nameable type of an annotation, or None."""
    if _is_unconstrained(hint):
        return None
    origin = get_origin(hint)
    if origin in (Union, UnionType):
        return None
    if origin is not None:
        if isinstance(origin, type):
            return origin.__name__
        return None
    if isinstance(hint, type):
        return hint.__name__
    return None


def _kind_of(tp: Any) -> type | None:
    """Return the builtin kind a class derives from, or None."""
    if not isinstance(tp, type):
        return None
    for kind in _KINDS:
        if issubclass(tp, kind):
            return kind
    return None


def _is_unconstrained(hint: Any) -> bool:
    return hint is Any or hint is object


__all__ = [
    "_unpack_annotated",
    "_unwrap_optional",
    "_strip",
    "_list_element",
    "_type_name",
    "_kind_of",
    "_is_unconstrained",
]
