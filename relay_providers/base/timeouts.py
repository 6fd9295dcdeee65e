"""Timeout configuration for transport calls.

Adapters pass an explicit ``timeout_ms`` on each request; the values come
from :func:`get_timeout_config` so deployments can stretch them without code
changes. Supported environment variables (all optional, seconds):

    RELAY_TIMEOUT_HTTP_SECONDS     chat completion requests
    RELAY_TIMEOUT_MODELS_SECONDS   model listing requests

The configuration is cached and recomputed only when those variables change.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import CHAT_REQUEST_TIMEOUT_MS, MODELS_REQUEST_TIMEOUT_MS


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values in milliseconds."""

    chat_timeout_ms: int = CHAT_REQUEST_TIMEOUT_MS
    models_timeout_ms: int = MODELS_REQUEST_TIMEOUT_MS


_CACHED: Optional[TimeoutConfig] = None
_ENV_GUARD: Optional[str] = None


def _parse_env_ms(name: str, default: int) -> int:
    """Read a positive float of seconds from ``name`` and return milliseconds."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return int(val * 1000) if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the cached :class:`TimeoutConfig`, refreshed when env overrides change."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(
        [
            os.getenv("RELAY_TIMEOUT_HTTP_SECONDS", ""),
            os.getenv("RELAY_TIMEOUT_MODELS_SECONDS", ""),
        ]
    )
    if _CACHED is not None and guard == _ENV_GUARD:
        return _CACHED
    _CACHED = TimeoutConfig(
        chat_timeout_ms=_parse_env_ms("RELAY_TIMEOUT_HTTP_SECONDS", CHAT_REQUEST_TIMEOUT_MS),
        models_timeout_ms=_parse_env_ms("RELAY_TIMEOUT_MODELS_SECONDS", MODELS_REQUEST_TIMEOUT_MS),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
