"""Exception hierarchy for cqlstruct.

All cqlstruct exceptions inherit from CqlStructError, allowing catch-all handling:

    try:
        mapping_to_struct(row, user)
    except CqlStructError as e:
        print(f"Translation error: {e}")

Exception hierarchy:
    CqlStructError (base)
    ├── ShapeError            - Broken record declaration (duplicate key)
    ├── NotARecordError       - Value is not a pydantic model or dataclass
    ├── TranslationError      - mapping_to_struct() could not assign a value
    │   ├── TypeMismatchError - No assignment rule matches the type pair
    │   └── UnnamedTypeError  - Target annotation has no nameable type
    ├── UnsupportedTypeError  - Map key/value type has no native column type
    └── EncodingError         - JSON encode/decode failure
"""

from __future__ import annotations


class CqlStructError(Exception):
    """Base exception for all cqlstruct-related errors."""


class ShapeError(CqlStructError):
    """Raised when a record shape declares the same key twice (case-insensitive)."""


class NotARecordError(CqlStructError, TypeError):
    """Raised when a record is required but something else was given."""


class TranslationError(CqlStructError):
    """Raised when a mapping value cannot be assigned to a record field."""


class TypeMismatchError(TranslationError):
    """Raised when no assignment rule handles the (field type, value type) pair."""


class UnnamedTypeError(TranslationError):
    """Raised when the field annotation cannot be reduced to a named type."""


class UnsupportedTypeError(CqlStructError):
    """Raised when a map key or value type cannot be stored natively."""


class EncodingError(CqlStructError):
    """Raised when a value cannot be converted to or from JSON text."""


__all__ = [
    "CqlStructError",
    "ShapeError",
    "NotARecordError",
    "TranslationError",
    "TypeMismatchError",
    "UnnamedTypeError",
    "UnsupportedTypeError",
    "EncodingError",
]
