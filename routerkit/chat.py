"""Chat and text-completion request and response types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import SerializationError, _optional, _require
from .provider_preferences import ProviderPreferences
from .tool import Tool, ToolCall


def _tool_calls(data: Mapping[str, Any]) -> list[ToolCall] | None:
    raw = _optional(data, "tool_calls", list)
    return None if raw is None else [ToolCall.from_dict(item) for item in raw]


class ChatRole(str, Enum):
    """Role of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass
class Message:
    """A chat message as sent to and received from the API."""

    role: str
    content: str
    name: str | None = None
    tool_calls: list[ToolCall] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name is not None:
            out["name"] = self.name
        if self.tool_calls is not None:
            out["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Message:
        return cls(
            role=_require(data, "role", str),
            content=_require(data, "content", str),
            name=_optional(data, "name", str),
            tool_calls=_tool_calls(data),
        )


@dataclass
class ChatMessage:
    """A message whose role is one of the fixed chat roles."""

    role: ChatRole
    content: str

    def to_message(self) -> Message:
        return Message(role=ChatRole(self.role).value, content=self.content)


@dataclass
class ChatCompletionRequest:
    """A chat completion request."""

    model: str
    messages: list[Message]
    stream: bool | None = None
    response_format: str | None = None
    tools: list[Tool] | None = None
    provider: ProviderPreferences | None = None
    models: list[str] | None = None
    transforms: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "model": self.model,
            "messages": [message.to_dict() for message in self.messages],
        }
        optional = {
            "stream": self.stream,
            "response_format": self.response_format,
            "tools": None if self.tools is None else [t.to_dict() for t in self.tools],
            "provider": None if self.provider is None else self.provider.to_dict(),
            "models": None if self.models is None else list(self.models),
            "transforms": None if self.transforms is None else list(self.transforms),
        }
        out.update((key, value) for key, value in optional.items() if value is not None)
        return out


@dataclass
class Choice:
    """One completed choice of a chat response."""

    message: Message
    finish_reason: str | None = None
    native_finish_reason: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Choice:
        return cls(
            message=Message.from_dict(_require(data, "message", Mapping)),
            finish_reason=_optional(data, "finish_reason", str),
            native_finish_reason=_optional(data, "native_finish_reason", str),
        )


@dataclass
class Usage:
    """Token usage reported by the API."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Usage:
        return cls(
            prompt_tokens=_require(data, "prompt_tokens", int),
            completion_tokens=_require(data, "completion_tokens", int),
            total_tokens=_require(data, "total_tokens", int),
        )


def _usage(data: Mapping[str, Any]) -> Usage | None:
    raw = _optional(data, "usage", Mapping)
    return None if raw is None else Usage.from_dict(raw)


@dataclass
class ChatCompletionResponse:
    """A complete chat response."""

    id: str
    choices: list[Choice]
    created: int
    model: str
    usage: Usage | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChatCompletionResponse:
        return cls(
            id=_require(data, "id", str),
            choices=[Choice.from_dict(c) for c in _require(data, "choices", list)],
            created=_require(data, "created", int),
            model=_require(data, "model", str),
            usage=_usage(data),
        )


@dataclass
class StreamDelta:
    """The incremental content of a streamed choice."""

    role: str | None = None
    content: str | None = None
    tool_calls: list[ToolCall] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StreamDelta:
        return cls(
            role=_optional(data, "role", str),
            content=_optional(data, "content", str),
            tool_calls=_tool_calls(data),
        )


@dataclass
class ChoiceStream:
    """A choice inside a streamed chunk."""

    delta: StreamDelta
    index: int | None = None
    finish_reason: str | None = None
    native_finish_reason: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChoiceStream:
        return cls(
            delta=StreamDelta.from_dict(_require(data, "delta", Mapping)),
            index=_optional(data, "index", int),
            finish_reason=_optional(data, "finish_reason", str),
            native_finish_reason=_optional(data, "native_finish_reason", str),
        )


@dataclass
class ChatCompletionChunk:
    """One chunk of a streamed chat response."""

    id: str
    choices: list[ChoiceStream]
    object: str | None = None
    created: int | None = None
    model: str | None = None
    usage: Usage | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChatCompletionChunk:
        return cls(
            id=_require(data, "id", str),
            choices=[ChoiceStream.from_dict(c) for c in _require(data, "choices", list)],
            object=_optional(data, "object", str),
            created=_optional(data, "created", int),
            model=_optional(data, "model", str),
            usage=_usage(data),
        )


@dataclass
class CompletionRequest:
    """A text completion request; extra parameters are merged into the body."""

    model: str
    prompt: str
    extra_params: Mapping[str, Any] | None = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"model": self.model, "prompt": self.prompt}
        if self.extra_params is None:
            return out
        if not isinstance(self.extra_params, Mapping):
            raise SerializationError("extra parameters must be a JSON object")
        out.update(self.extra_params)
        return out


@dataclass
class CompletionChoice:
    """One choice of a text completion."""

    text: str
    index: int | None = None
    finish_reason: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CompletionChoice:
        return cls(
            text=_require(data, "text", str),
            index=_optional(data, "index", int),
            finish_reason=_optional(data, "finish_reason", str),
        )


@dataclass
class CompletionResponse:
    """A text completion response."""

    choices: list[CompletionChoice]
    id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CompletionResponse:
        return cls(
            choices=[CompletionChoice.from_dict(c) for c in _require(data, "choices", list)],
            id=_optional(data, "id", str),
        )