"""Environment variable names for provider API keys.

Every provider id maps to ``<PREFIX>_API_KEY`` where ``PREFIX`` is the id
upper-cased with ``-`` replaced by ``_`` (``openai-compatible`` ->
``OPENAI_COMPATIBLE_API_KEY``). ``KEY_ALIASES`` lists extra names accepted
after the canonical one.

Lookups never raise: unset or placeholder values resolve to ``None`` and the
caller decides what that means (adapters turn it into a "missing credential"
configuration error).
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

KEY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "anthropic": ("CLAUDE_API_KEY",),
}

_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "example")


def env_prefix(provider: str) -> str:
    """Return the env var prefix for a provider id (``openai-compatible`` -> ``OPENAI_COMPATIBLE``)."""
    return (provider or "").strip().upper().replace("-", "_")


def key_env_names(provider: str) -> Tuple[str, ...]:
    """Variable names holding the provider's API key, canonical first; ``()`` for a blank id."""
    prefix = env_prefix(provider)
    if not prefix:
        return ()
    return (f"{prefix}_API_KEY", *KEY_ALIASES.get(provider.strip().lower(), ()))


def is_placeholder(value: Optional[str]) -> bool:
    """True for template values such as ``changeme`` or ``test_...`` that are not real keys."""
    if value is None:
        return False
    v = value.strip().lower()
    return v.startswith("test_") or any(marker in v for marker in _PLACEHOLDER_MARKERS)


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, variable)`` for the first usable key, else ``(None, None)``."""
    for name in key_env_names(provider):
        value = os.environ.get(name)
        if value and not is_placeholder(value):
            return value, name
    return None, None


__all__ = ["KEY_ALIASES", "env_prefix", "key_env_names", "is_placeholder", "resolve_provider_key"]
