"""relay_providers.config.defaults
================================

Central place for small, stable default values used across the package.
These can be overridden through environment variables or an external config
file (see :mod:`relay_providers.config`), but provide the fallbacks used when
nothing else is configured.

Only plain constants live here; this module imports nothing from the rest of
the package.
"""

from __future__ import annotations

# ---- Provider base URLs ----
# Base URLs exclude the ``/v1/...`` suffix; adapters append their endpoint.
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api"

# Anthropic Messages API version header value.
ANTHROPIC_API_VERSION = "2023-06-01"
# Anthropic requires max_tokens; used when the turn does not set one.
ANTHROPIC_DEFAULT_MAX_TOKENS = 1024

# ---- Static model lists (caller-side fallbacks when listing fails) ----
OPENAI_FALLBACK_MODELS = [
    "gpt-4o-mini",
    "gpt-4o",
    "gpt-4.1-mini",
    "gpt-4.1",
    "gpt-3.5-turbo",
]
ANTHROPIC_FALLBACK_MODELS = [
    "claude-3-5-sonnet-20240620",
    "claude-3-5-haiku-20241022",
    "claude-3-opus-20240229",
    "claude-3-sonnet-20240229",
    "claude-3-haiku-20240307",
]
CUSTOM_FALLBACK_MODEL = "default"

# ---- Turn defaults applied by the chat runner ----
TURN_DEFAULT_MAX_TOKENS = 1024
TURN_DEFAULT_TEMPERATURE = 0.7
TURN_DEFAULT_TOP_P = 1.0

# ---- Model list cache ----
# Freshness window for cached model lists, in seconds (six hours).
MODELS_CACHE_TTL_SECONDS = 6 * 60 * 60

# ---- Transport ----
# Timeouts in milliseconds for the two request kinds adapters issue.
MODELS_REQUEST_TIMEOUT_MS = 15_000
CHAT_REQUEST_TIMEOUT_MS = 120_000
# Event channel prefix used by the delegated transport (``api://<request_id>``).
STREAM_CHANNEL_PREFIX = "api://"
# Host commands understood by a host bridge.
HOST_REQUEST_COMMAND = "api_request"
HOST_ABORT_COMMAND = "abort_request"

# ---- Think markup ----
THINK_OPEN_TAG = "<think>"
THINK_CLOSE_TAG = "</think>"


__all__ = [
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "OPENAI_FALLBACK_MODELS",
    "ANTHROPIC_FALLBACK_MODELS",
    "CUSTOM_FALLBACK_MODEL",
    "TURN_DEFAULT_MAX_TOKENS",
    "TURN_DEFAULT_TEMPERATURE",
    "TURN_DEFAULT_TOP_P",
    "MODELS_CACHE_TTL_SECONDS",
    "MODELS_REQUEST_TIMEOUT_MS",
    "CHAT_REQUEST_TIMEOUT_MS",
    "STREAM_CHANNEL_PREFIX",
    "HOST_REQUEST_COMMAND",
    "HOST_ABORT_COMMAND",
    "THINK_OPEN_TAG",
    "THINK_CLOSE_TAG",
]
