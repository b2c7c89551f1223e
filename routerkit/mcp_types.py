"""Model Context Protocol wire types: JSON-RPC envelopes and capabilities."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from .errors import _optional, _require

MCP_PROTOCOL_VERSION = "2025-03-26"
"""Protocol version spoken by this package."""

JSONRPC_VERSION = "2.0"

_T = TypeVar("_T")


def _items(data: Mapping[str, Any], key: str, parse: Callable[[Any], _T]) -> list[_T]:
    return [parse(item) for item in _require(data, key, list)]


def _nested(data: Mapping[str, Any], key: str, parse: Callable[[Any], _T]) -> _T | None:
    raw = _optional(data, key, Mapping)
    return None if raw is None else parse(raw)


def _compact(pairs: Mapping[str, Any], always: tuple[str, ...] = ()) -> dict[str, Any]:
    return {k: v for k, v in pairs.items() if v is not None or k in always}


@dataclass
class JsonRpcRequest:
    """A JSON-RPC request."""

    id: str
    method: str
    params: Any = None
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {"jsonrpc": self.jsonrpc, "id": self.id, "method": self.method, "params": self.params}
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JsonRpcRequest:
        return cls(
            jsonrpc=_require(data, "jsonrpc", str),
            id=_require(data, "id", str),
            method=_require(data, "method", str),
            params=_optional(data, "params"),
        )


@dataclass
class JsonRpcError:
    """The error object of a JSON-RPC response."""

    code: int
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"code": self.code, "message": self.message, "data": self.data})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JsonRpcError:
        return cls(
            code=_require(data, "code", int),
            message=_require(data, "message", str),
            data=_optional(data, "data"),
        )


@dataclass
class JsonRpcResponse:
    """A JSON-RPC response carrying either a result or an error."""

    id: str
    result: Any = None
    error: JsonRpcError | None = None
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "jsonrpc": self.jsonrpc,
                "id": self.id,
                "result": self.result,
                "error": None if self.error is None else self.error.to_dict(),
            }
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JsonRpcResponse:
        return cls(
            jsonrpc=_require(data, "jsonrpc", str),
            id=_require(data, "id", str),
            result=_optional(data, "result"),
            error=_nested(data, "error", JsonRpcError.from_dict),
        )


@dataclass
class ClientCapabilities:
    """What the client supports."""

    protocol_version: str
    supports_sampling: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "protocol_version": self.protocol_version,
                "supports_sampling": self.supports_sampling,
            }
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientCapabilities:
        return cls(
            protocol_version=_require(data, "protocol_version", str),
            supports_sampling=_optional(data, "supports_sampling", bool),
        )


@dataclass
class Resource:
    """A resource exposed by a server."""

    id: str
    name: str
    description: str | None = None
    metadata: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Resource:
        return cls(
            id=_require(data, "id", str),
            name=_require(data, "name", str),
            description=_optional(data, "description", str),
            metadata=_optional(data, "metadata"),
        )

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "id": self.id,
                "name": self.name,
                "description": self.description,
                "metadata": self.metadata,
            }
        )


@dataclass
class ResourceGroup:
    """A named group of resources."""

    id: str
    name: str
    resources: list[Resource]
    description: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceGroup:
        return cls(
            id=_require(data, "id", str),
            name=_require(data, "name", str),
            resources=_items(data, "resources", Resource.from_dict),
            description=_optional(data, "description", str),
        )

    def to_dict(self) -> dict[str, Any]:
        out = _compact({"id": self.id, "name": self.name, "description": self.description})
        out["resources"] = [r.to_dict() for r in self.resources]
        return out


@dataclass
class ResourceCapabilities:
    """Resource groups offered by a server."""

    resource_groups: list[ResourceGroup]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceCapabilities:
        return cls(_items(data, "resource_groups", ResourceGroup.from_dict))

    def to_dict(self) -> dict[str, Any]:
        return {"resource_groups": [g.to_dict() for g in self.resource_groups]}


@dataclass
class McpTool:
    """A tool exposed by a server, with parameter and return schemas."""

    id: str
    name: str
    parameter_schema: Any
    return_schema: Any
    description: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> McpTool:
        return cls(
            id=_require(data, "id", str),
            name=_require(data, "name", str),
            parameter_schema=_require(data, "parameter_schema"),
            return_schema=_require(data, "return_schema"),
            description=_optional(data, "description", str),
        )

    def to_dict(self) -> dict[str, Any]:
        out = _compact({"id": self.id, "name": self.name, "description": self.description})
        out["parameter_schema"] = self.parameter_schema
        out["return_schema"] = self.return_schema
        return out


@dataclass
class ToolCapabilities:
    """Tools offered by a server."""

    tools: list[McpTool]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ToolCapabilities:
        return cls(_items(data, "tools", McpTool.from_dict))

    def to_dict(self) -> dict[str, Any]:
        return {"tools": [t.to_dict() for t in self.tools]}


@dataclass
class Prompt:
    """A prompt exposed by a server."""

    id: str
    name: str
    description: str | None = None
    parameter_schema: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Prompt:
        return cls(
            id=_require(data, "id", str),
            name=_require(data, "name", str),
            description=_optional(data, "description", str),
            parameter_schema=_optional(data, "parameter_schema"),
        )

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "id": self.id,
                "name": self.name,
                "description": self.description,
                "parameter_schema": self.parameter_schema,
            }
        )


@dataclass
class PromptCapabilities:
    """Prompts offered by a server."""

    prompts: list[Prompt]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PromptCapabilities:
        return cls(_items(data, "prompts", Prompt.from_dict))

    def to_dict(self) -> dict[str, Any]:
        return {"prompts": [p.to_dict() for p in self.prompts]}


@dataclass
class ServerCapabilities:
    """What a server offers, as returned by initialize."""

    protocol_version: str
    resources: ResourceCapabilities | None = None
    tools: ToolCapabilities | None = None
    prompts: PromptCapabilities | None = None
    requires_sampling: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ServerCapabilities:
        return cls(
            protocol_version=_require(data, "protocol_version", str),
            resources=_nested(data, "resources", ResourceCapabilities.from_dict),
            tools=_nested(data, "tools", ToolCapabilities.from_dict),
            prompts=_nested(data, "prompts", PromptCapabilities.from_dict),
            requires_sampling=_optional(data, "requires_sampling", bool),
        )

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "protocol_version": self.protocol_version,
                "resources": None if self.resources is None else self.resources.to_dict(),
                "tools": None if self.tools is None else self.tools.to_dict(),
                "prompts": None if self.prompts is None else self.prompts.to_dict(),
                "requires_sampling": self.requires_sampling,
            }
        )


@dataclass
class GetResourceParams:
    """Parameters of a getResource call."""

    id: str
    parameters: Any = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"id": self.id, "parameters": self.parameters})


@dataclass
class ResourceResponse:
    """Content of a fetched resource."""

    content: str
    mime_type: str
    metadata: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceResponse:
        return cls(
            content=_require(data, "content", str),
            mime_type=_require(data, "mime_type", str),
            metadata=_optional(data, "metadata"),
        )


@dataclass
class ToolCallParams:
    """Parameters of a toolCall call."""

    id: str
    parameters: Any

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "parameters": self.parameters}


@dataclass
class ToolCallResponse:
    """Result of a tool call."""

    result: Any

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ToolCallResponse:
        return cls(_require(data, "result"))


@dataclass
class ExecutePromptParams:
    """Parameters of an executePrompt call."""

    id: str
    parameters: Any = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"id": self.id, "parameters": self.parameters})


@dataclass
class ExecutePromptResponse:
    """Result of executing a prompt."""

    result: Any

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExecutePromptResponse:
        return cls(_require(data, "result"))


@dataclass
class SamplingParams:
    """A sampling request from a server."""

    task: str
    system_prompt: str | None = None
    parameters: Any = None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "task": self.task,
                "system_prompt": self.system_prompt,
                "parameters": self.parameters,
            }
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SamplingParams:
        return cls(
            task=_require(data, "task", str),
            system_prompt=_optional(data, "system_prompt", str),
            parameters=_optional(data, "parameters"),
        )


@dataclass
class SamplingResponse:
    """The client's answer to a sampling request."""

    result: str

    def to_dict(self) -> dict[str, Any]:
        return {"result": self.result}