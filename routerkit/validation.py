"""Checks and rough token estimates for chat completion requests."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from .chat import ChatCompletionRequest, Message
from .errors import ConfigError, ContextLengthExceeded
from .tool import Tool

MAX_TOKENS = 32_000
"""Largest estimated request size accepted by check_token_limits."""

_VALID_ROLES = frozenset({"user", "assistant", "system"})
_ROLE_TOKENS = 3
_TOOL_OVERHEAD_TOKENS = 10
_REQUEST_OVERHEAD_TOKENS = 10


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def validate_chat_request(request: ChatCompletionRequest) -> None:
    """Raise ConfigError if the request has an obvious mistake."""
    if not request.model.strip():
        raise ConfigError("Model ID cannot be empty")
    if not request.messages:
        raise ConfigError("Messages array cannot be empty")
    for index, message in enumerate(request.messages):
        _validate_message(message, index)
    if request.tools is not None:
        _validate_tools(request.tools)


def _validate_message(message: Message, index: int) -> None:
    if message.role not in _VALID_ROLES:
        raise ConfigError(
            f"Invalid role at message[{index}]: '{message.role}'. "
            "Must be 'user', 'assistant', or 'system'"
        )
    if not message.content.strip() and message.tool_calls is None:
        raise ConfigError(
            f"Message at index {index} must have either non-empty content or tool_calls"
        )
    if message.tool_calls is None:
        return
    if message.role != "assistant":
        raise ConfigError(
            f"Message at index {index} has tool_calls but role is "
            f"'{message.role}', not 'assistant'"
        )
    for call_index, call in enumerate(message.tool_calls):
        if not call.id.strip():
            raise ConfigError(
                f"Tool call {call_index} at message {index} has empty id"
            )
        if call.kind != "function":
            raise ConfigError(
                f"Tool call {call_index} at message {index} has invalid type: "
                f"'{call.kind}'. Must be 'function'"
            )
        if not call.function_call.name.strip():
            raise ConfigError(
                f"Function name in tool call {call_index} at message {index} "
                "cannot be empty"
            )


def _validate_tools(tools: Iterable[Tool]) -> None:
    seen: set[str] = set()
    for index, tool in enumerate(tools):
        function = tool.function
        if not function.name.strip():
            raise ConfigError(f"Function name in tool[{index}] cannot be empty")
        if function.name in seen:
            raise ConfigError(f"Duplicate function name '{function.name}' in tools")
        seen.add(function.name)
        if not isinstance(function.parameters, Mapping):
            raise ConfigError(
                f"Parameters for function '{function.name}' must be a JSON object"
            )


def estimate_message_tokens(message: Message) -> int:
    """Roughly estimate a message's tokens at one token per four bytes."""
    content_tokens = _byte_len(message.content) // 4
    tool_call_tokens = sum(
        _byte_len(call.function_call.name) // 4
        + _byte_len(call.function_call.arguments) // 4
        + _TOOL_OVERHEAD_TOKENS
        for call in message.tool_calls or ()
    )
    return _ROLE_TOKENS + content_tokens + tool_call_tokens


def _parameters_tokens(parameters: Any) -> int:
    try:
        text = json.dumps(parameters, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return 0
    return _byte_len(text) // 4


def _tool_tokens(tool: Tool) -> int:
    function = tool.function
    name_tokens = _byte_len(function.name) // 4
    desc_tokens = (
        0 if function.description is None else _byte_len(function.description) // 4
    )
    return (
        name_tokens
        + desc_tokens
        + _parameters_tokens(function.parameters)
        + _TOOL_OVERHEAD_TOKENS
    )


def estimate_request_tokens(request: ChatCompletionRequest) -> int:
    """Roughly estimate the total tokens of a request."""
    message_tokens = sum(estimate_message_tokens(m) for m in request.messages)
    tool_tokens = sum(_tool_tokens(t) for t in request.tools or ())
    return message_tokens + _REQUEST_OVERHEAD_TOKENS + tool_tokens


def check_token_limits(request: ChatCompletionRequest) -> None:
    """Raise ContextLengthExceeded if the estimate is above MAX_TOKENS."""
    estimated = estimate_request_tokens(request)
    if estimated > MAX_TOKENS:
        raise ContextLengthExceeded(
            request.model,
            f"Estimated token count ({estimated}) exceeds maximum context length "
            f"({MAX_TOKENS})",
        )