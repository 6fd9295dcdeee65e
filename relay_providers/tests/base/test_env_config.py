"""Tests for the configuration merge layer, key env mapping and timeouts."""
from __future__ import annotations

import json

from relay_providers.base.timeouts import get_timeout_config
from relay_providers.config import CONFIG_FILE_ENV, get_default_base_url, get_provider_config
from relay_providers.config.env import (
    env_prefix,
    is_placeholder,
    key_env_names,
    resolve_provider_key,
)


def test_defaults_cover_registered_providers():
    assert get_default_base_url("openai") == "https://api.openai.com"  # nosec B101
    assert get_default_base_url("anthropic") == "https://api.anthropic.com"  # nosec B101
    assert get_default_base_url("openrouter") == "https://openrouter.ai/api"  # nosec B101
    assert get_default_base_url("openai-compatible") is None  # nosec B101
    assert get_provider_config("unknown-thing") == {}  # nosec B101


def test_env_overrides_file_and_overrides_win(monkeypatch, tmp_path):
    cfg_file = tmp_path / "relay.json"
    cfg_file.write_text(
        json.dumps({"openai-compatible": {"base_url": "http://localhost:8080", "model": "file-model"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv(CONFIG_FILE_ENV, str(cfg_file))
    assert get_provider_config("openai-compatible")["base_url"] == "http://localhost:8080"  # nosec B101

    monkeypatch.setenv("OPENAI_COMPATIBLE_BASE_URL", "http://localhost:11434")
    cfg = get_provider_config("openai-compatible")
    assert cfg == {"base_url": "http://localhost:11434", "model": "file-model"}  # nosec B101

    cfg = get_provider_config("openai-compatible", overrides={"model": "override", "base_url": None})
    assert cfg["model"] == "override" and cfg["base_url"] == "http://localhost:11434"  # nosec B101


def test_missing_config_file_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "absent.yaml"))
    assert get_provider_config("openai") == {"base_url": "https://api.openai.com"}  # nosec B101


def test_env_prefix_and_names():
    assert env_prefix("openai-compatible") == "OPENAI_COMPATIBLE"  # nosec B101
    assert key_env_names("Anthropic") == ("ANTHROPIC_API_KEY", "CLAUDE_API_KEY")  # nosec B101
    assert key_env_names("custom-json") == ("CUSTOM_JSON_API_KEY",)  # nosec B101
    assert key_env_names("") == ()  # nosec B101


def test_resolve_provider_key_skips_placeholders(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "changeme")
    monkeypatch.setenv("CLAUDE_API_KEY", "sk-ant-real")
    assert resolve_provider_key("anthropic") == ("sk-ant-real", "CLAUDE_API_KEY")  # nosec B101
    assert resolve_provider_key("openai") == (None, None)  # nosec B101
    assert is_placeholder("Your-Example-Key") is True  # nosec B101
    assert is_placeholder(None) is False  # nosec B101


def test_timeout_config_defaults_and_env(monkeypatch):
    cfg = get_timeout_config()
    assert cfg.chat_timeout_ms == 120_000 and cfg.models_timeout_ms == 15_000  # nosec B101

    monkeypatch.setenv("RELAY_TIMEOUT_MODELS_SECONDS", "2.5")
    monkeypatch.setenv("RELAY_TIMEOUT_HTTP_SECONDS", "not-a-number")
    cfg = get_timeout_config()
    assert cfg.models_timeout_ms == 2500 and cfg.chat_timeout_ms == 120_000  # nosec B101
