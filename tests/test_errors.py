import pytest

from routerkit.errors import (
    ApiError,
    ConfigError,
    ContextLengthExceeded,
    HttpError,
    MissingCredential,
    RouterError,
    SerializationError,
)


@pytest.mark.parametrize(
    "cls", [ConfigError, MissingCredential, SerializationError, HttpError]
)
def test_simple_errors_carry_message_and_share_base(cls):
    err = cls("Model ID cannot be empty")
    assert str(err) == "Model ID cannot be empty"
    assert isinstance(err, RouterError)


def test_api_error_keeps_fields():
    err = ApiError(404, "not here", {"detail": "gone"})
    assert err.code == 404
    assert err.message == "not here"
    assert err.metadata == {"detail": "gone"}
    assert "not here" in str(err)
    assert "404" in str(err)


def test_api_error_metadata_defaults_to_none():
    err = ApiError(500, "boom")
    assert err.metadata is None
    assert isinstance(err, RouterError)


def test_context_length_exceeded_mentions_model():
    err = ContextLengthExceeded("openai/gpt-4o", "too many tokens")
    assert err.model == "openai/gpt-4o"
    assert err.message == "too many tokens"
    assert "openai/gpt-4o" in str(err)
    assert "too many tokens" in str(err)


def test_missing_credential_is_not_config_error():
    err = MissingCredential("API key not found in environment variables")
    assert str(err) == "API key not found in environment variables"
    assert isinstance(err, RouterError)
    assert not isinstance(err, ConfigError)