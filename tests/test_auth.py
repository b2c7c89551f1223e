from concurrent.futures import ThreadPoolExecutor

import pytest

from routerkit.auth import load_api_key_from_env, validate_api_key
from routerkit.errors import ConfigError, MissingCredential


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    monkeypatch.delenv("OR_API_KEY", raising=False)
    return monkeypatch


def test_load_api_key_from_env_success(clean_env):
    clean_env.setenv("OPENROUTER_API_KEY", "sk-test1234567890abcdef1234567890abcdef")
    assert load_api_key_from_env() == "sk-test1234567890abcdef1234567890abcdef"


def test_load_api_key_from_env_missing():
    with pytest.raises(MissingCredential) as info:
        load_api_key_from_env()
    message = str(info.value)
    assert "OPENROUTER_API_KEY" in message
    assert "environment" in message


def test_load_api_key_from_env_empty(clean_env):
    clean_env.setenv("OPENROUTER_API_KEY", "")
    with pytest.raises(MissingCredential, match="not found"):
        load_api_key_from_env()


def test_load_api_key_from_env_whitespace(clean_env):
    clean_env.setenv("OPENROUTER_API_KEY", "   \n\t   ")
    with pytest.raises(MissingCredential, match="not found"):
        load_api_key_from_env()


def test_load_api_key_returns_raw_value(clean_env):
    clean_env.setenv("OPENROUTER_API_KEY", "  sk-test1234567890abcdef1234567890abcdef  ")
    assert load_api_key_from_env() == "  sk-test1234567890abcdef1234567890abcdef  "


def test_load_api_key_with_newlines(clean_env):
    clean_env.setenv("OPENROUTER_API_KEY", "sk-test1234567890abcdef1234567890abcdef\n")
    assert load_api_key_from_env() == "sk-test1234567890abcdef1234567890abcdef\n"


def test_load_api_key_preserves_internal_content(clean_env):
    test_key = "sk-test123_with-special.chars890abcdef"
    clean_env.setenv("OPENROUTER_API_KEY", test_key)
    assert load_api_key_from_env() == test_key


def test_or_api_key_fallback(clean_env):
    clean_env.setenv("OR_API_KEY", "or-1234567890abcdef1234567890abcdef")
    assert load_api_key_from_env() == "or-1234567890abcdef1234567890abcdef"


def test_or_api_key_priority(clean_env):
    clean_env.setenv("OPENROUTER_API_KEY", "sk-primary-key-1234567890abcdef")
    clean_env.setenv("OR_API_KEY", "or-fallback-key-1234567890abcdef")
    assert load_api_key_from_env() == "sk-primary-key-1234567890abcdef"


def test_blank_primary_falls_back(clean_env):
    clean_env.setenv("OPENROUTER_API_KEY", "  ")
    clean_env.setenv("OR_API_KEY", "or-fallback-key-1234567890abcdef")
    assert load_api_key_from_env() == "or-fallback-key-1234567890abcdef"


def test_auth_functions_thread_safe():
    keys = [f"sk-thread{i}1234567890abcdef1234567890abcdef" for i in range(10)]
    with ThreadPoolExecutor(max_workers=10) as pool:
        results = list(pool.map(validate_api_key, keys))
    assert results == keys


def test_validate_api_key_valid():
    assert validate_api_key("sk-1234567890abcdef") == "sk-1234567890abcdef"


def test_validate_api_key_empty():
    with pytest.raises(ConfigError, match="empty"):
        validate_api_key("")


def test_validate_api_key_whitespace():
    with pytest.raises(ConfigError, match="empty"):
        validate_api_key("   ")


def test_validate_api_key_too_short():
    with pytest.raises(ConfigError, match="too short"):
        validate_api_key("short")


def test_validate_api_key_with_whitespace():
    assert validate_api_key("  sk-1234567890abcdef  ") == "sk-1234567890abcdef"