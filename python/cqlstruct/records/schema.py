"""Column schema of a record shape.

schema_of() pairs every exported key of a record shape with the schema type
string inferred from its field annotation, ready for a DDL generator:

    class Reading(Record):
        sensor: UUID
        taken_at: datetime
        samples: list[float]

    schema_of(Reading)
    →  {"sensor": "uuid", "taken_at": "timestamp", "samples": "list<double>"}
"""

from __future__ import annotations

from cqlstruct.core.inference import type_name_of
from cqlstruct.records.registry import get_shape_metadata


def schema_of(shape: type) -> dict[str, str]:
    """Return key → schema type string for each exported field of ``shape``.

    Raises UnsupportedTypeError if a dict field has a non-native key or value.
    """
    metadata = get_shape_metadata(shape)
    return {info.key: type_name_of(info.annotation) for info in metadata.exported}


__all__ = ["schema_of"]
