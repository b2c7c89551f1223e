"""API key discovery and validation."""

from __future__ import annotations

import os

from .errors import ConfigError, MissingCredential

_ENV_VARS = ("OPENROUTER_API_KEY", "OR_API_KEY")


def load_api_key_from_env() -> str:
    """Return the API key from OPENROUTER_API_KEY, falling back to OR_API_KEY.

    The value is returned as stored; blank values are treated as absent.
    """
    for name in _ENV_VARS:
        key = os.environ.get(name)
        if key is not None and key.strip():
            return key
    raise MissingCredential(
        "API key not found in environment variables OPENROUTER_API_KEY or OR_API_KEY"
    )


def validate_api_key(key: str) -> str:
    """Check that a key is non-blank and long enough; return it stripped."""
    key = key.strip()
    if not key:
        raise ConfigError("API key cannot be empty")
    if len(key.encode("utf-8")) < 10:
        raise ConfigError("API key is too short")
    return key