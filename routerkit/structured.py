"""JSON Schema configuration for structured outputs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import _optional, _require


@dataclass
class JsonSchemaDefinition:
    """A JSON Schema definition with the commonly used keywords."""

    schema_type: str
    properties: dict[str, Any]
    required: list[str] | None = None
    additional_properties: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.schema_type, "properties": dict(self.properties)}
        if self.required is not None:
            out["required"] = list(self.required)
        if self.additional_properties is not None:
            out["additionalProperties"] = self.additional_properties
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JsonSchemaDefinition:
        required = _optional(data, "required", list)
        return cls(
            schema_type=_require(data, "type", str),
            properties=dict(_require(data, "properties", Mapping)),
            required=None if required is None else list(required),
            additional_properties=_optional(data, "additionalProperties", bool),
        )


@dataclass
class JsonSchemaConfig:
    """A named schema the model output must follow."""

    name: str
    strict: bool
    schema: JsonSchemaDefinition

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "strict": self.strict, "schema": self.schema.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JsonSchemaConfig:
        return cls(
            name=_require(data, "name", str),
            strict=_require(data, "strict", bool),
            schema=JsonSchemaDefinition.from_dict(_require(data, "schema", Mapping)),
        )