"""Exception hierarchy shared by the whole package."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class RouterError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(RouterError):
    """A request, option or setting is invalid."""


class MissingCredential(RouterError):
    """No API key could be found."""


class SerializationError(RouterError):
    """Data could not be converted to or from its wire form."""


class HttpError(RouterError):
    """The HTTP transport failed before a response arrived."""


class ApiError(RouterError):
    """The remote side answered with an error."""

    def __init__(self, code: int, message: str, metadata: Any = None) -> None:
        super().__init__(f"API error ({code}): {message}")
        self.code = code
        self.message = message
        self.metadata = metadata


class ContextLengthExceeded(RouterError):
    """A request is estimated to be larger than the model allows."""

    def __init__(self, model: str, message: str) -> None:
        super().__init__(f"Context length exceeded for model '{model}': {message}")
        self.model = model
        self.message = message


def _check(key: str, value: Any, kind: Any) -> Any:
    if kind is None:
        return value
    if kind is int and isinstance(value, bool):
        raise SerializationError(f"invalid type for field `{key}`: expected integer")
    if not isinstance(value, kind):
        name = getattr(kind, "__name__", str(kind))
        raise SerializationError(f"invalid type for field `{key}`: expected {name}")
    return value


def _require(data: Any, key: str, kind: Any = None) -> Any:
    """Fetch a mandatory field from a decoded JSON object."""
    if not isinstance(data, Mapping):
        raise SerializationError("expected a JSON object")
    if key not in data:
        raise SerializationError(f"missing field `{key}`")
    return _check(key, data[key], kind)


def _optional(data: Any, key: str, kind: Any = None) -> Any:
    """Fetch an optional field; absent and null both give None."""
    if not isinstance(data, Mapping):
        raise SerializationError("expected a JSON object")
    value = data.get(key)
    if value is None:
        return None
    return _check(key, value, kind)