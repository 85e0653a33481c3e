"""Record base class.

Record is a pydantic model with the translator wired in as methods. Plain
pydantic models and dataclasses work with the module-level functions too;
Record only saves the imports and adds per-class configuration:

    class Sensor(Record):
        id: Annotated[UUID, Key("sensor_id")]
        readings: list[Reading] = []

        class Meta:
            decode_policy = DecodePolicy.STRICT

    row = {"sensor_id": uuid4(), "readings": ['{"value": 1.5}']}
    sensor = Sensor.from_mapping(row)
    sensor.to_mapping()

Meta options:
    decode_policy: DecodePolicy used by mapping_to_struct() for this class
        when the caller passes none. Defaults to the global setting.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict
from typing_extensions import Self

from cqlstruct.config import DecodePolicy
from cqlstruct.records.registry import get_shape_metadata
from cqlstruct.records.schema import schema_of
from cqlstruct.records.shape import ShapeMetadata
from cqlstruct.records.translator import (
    fields_and_values,
    mapping_to_struct,
    struct_to_mapping,
)


class Record(BaseModel):
    """Pydantic model that converts to and from store mappings."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    class Meta:
        decode_policy: DecodePolicy | None = None

    @classmethod
    def shape_metadata(cls) -> ShapeMetadata:
        return get_shape_metadata(cls)

    @classmethod
    def column_schema(cls) -> dict[str, str]:
        """Key → schema type string for each exported field."""
        return schema_of(cls)

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        *,
        decode_policy: DecodePolicy | str | None = None,
    ) -> Self:
        """Build an instance from a store mapping without running validation.

        Fields absent from the mapping keep their declared defaults.
        """
        instance = cls.model_construct()
        mapping_to_struct(mapping, instance, decode_policy=decode_policy)
        return instance

    def update_from_mapping(
        self,
        mapping: Mapping[str, Any],
        *,
        decode_policy: DecodePolicy | str | None = None,
    ) -> None:
        mapping_to_struct(mapping, self, decode_policy=decode_policy)

    def to_mapping(self) -> dict[str, Any]:
        mapping, _ = struct_to_mapping(self)
        return mapping

    def fields_and_values(self) -> tuple[list[str], list[Any]]:
        keys, values, _ = fields_and_values(self)
        return keys, values


__all__ = ["Record"]
