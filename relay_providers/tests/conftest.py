"""Pytest configuration for the relay test suite.

Clears environment variables that change transport selection, timeouts,
config merging or key resolution, so tests see built-in defaults unless they
set a value themselves.
"""
from __future__ import annotations

from typing import Iterator

import pytest

_ISOLATED_ENV = (
    "RELAY_TRANSPORT",
    "RELAY_CONFIG_FILE",
    "RELAY_TIMEOUT_HTTP_SECONDS",
    "RELAY_TIMEOUT_MODELS_SECONDS",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
    "ANTHROPIC_BASE_URL",
    "OPENROUTER_BASE_URL",
    "OPENAI_COMPATIBLE_BASE_URL",
    "CUSTOM_JSON_BASE_URL",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "CLAUDE_API_KEY",
    "OPENROUTER_API_KEY",
    "OPENAI_COMPATIBLE_API_KEY",
    "CUSTOM_JSON_API_KEY",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove relay-related variables for the duration of each test."""
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    yield
