"""Tool-calling types: function descriptions, tool calls and tool choice."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from .errors import SerializationError, _optional, _require


@dataclass
class FunctionDescription:
    """A callable function: name, optional description and JSON Schema parameters."""

    name: str
    parameters: Any
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        if self.description is not None:
            out["description"] = self.description
        out["parameters"] = self.parameters
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FunctionDescription:
        return cls(
            name=_require(data, "name", str),
            parameters=_require(data, "parameters"),
            description=_optional(data, "description", str),
        )


@dataclass
class Tool:
    """A tool the model may call; only function tools exist."""

    function: FunctionDescription
    type: ClassVar[str] = "function"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "function": self.function.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Tool:
        tag = _require(data, "type", str)
        if tag != cls.type:
            raise SerializationError(f"unknown variant `{tag}`, expected `function`")
        return cls(FunctionDescription.from_dict(_require(data, "function", Mapping)))


@dataclass
class FunctionCall:
    """A function invocation requested by the model; arguments are JSON text."""

    name: str
    arguments: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "arguments": self.arguments}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FunctionCall:
        return cls(
            name=_require(data, "name", str),
            arguments=_require(data, "arguments", str),
        )


@dataclass
class ToolCall:
    """A tool call as returned by the API."""

    id: str
    function_call: FunctionCall
    kind: str = "function"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.kind,
            "function": self.function_call.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ToolCall:
        return cls(
            id=_require(data, "id", str),
            kind=_require(data, "type", str),
            function_call=FunctionCall.from_dict(_require(data, "function", Mapping)),
        )


@dataclass(frozen=True)
class FunctionName:
    """The name of a function picked as the tool choice."""

    name: str


@dataclass(frozen=True)
class ToolChoice:
    """How the model selects a tool: "none", "auto" or a named function."""

    mode: str
    selected: FunctionName | None = None

    @classmethod
    def none(cls) -> ToolChoice:
        return cls("none")

    @classmethod
    def auto(cls) -> ToolChoice:
        return cls("auto")

    @classmethod
    def function(cls, name: str) -> ToolChoice:
        return cls("function", FunctionName(name))

    def to_json(self) -> str | dict[str, Any]:
        if self.selected is None:
            return self.mode
        return {"type": self.mode, "function": {"name": self.selected.name}}

    @classmethod
    def from_json(cls, data: Any) -> ToolChoice:
        if isinstance(data, str):
            return cls(data)
        if isinstance(data, Mapping):
            kind = _require(data, "type", str)
            function = _require(data, "function", Mapping)
            return cls(kind, FunctionName(_require(function, "name", str)))
        raise SerializationError("data did not match any variant of ToolChoice")