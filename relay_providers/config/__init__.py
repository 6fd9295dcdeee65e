"""Unified configuration layer for providers.

Merge order (later wins):
    1. Built-in defaults (``DEFAULTS``)
    2. Optional external config file (JSON or YAML) at ``RELAY_CONFIG_FILE``
    3. Environment variables ``<PROVIDER>_BASE_URL`` / ``<PROVIDER>_MODEL``
       (provider id upper-cased, ``-`` replaced by ``_``)
    4. In-code overrides passed to :func:`get_provider_config`

Secrets are deliberately not part of this layer; they are resolved per
request through a secret store.

External config file example::

    openrouter:
      base_url: https://openrouter.ai/api
    openai-compatible:
      base_url: http://localhost:11434

JSON is tried first, then YAML.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_BASE_URL,
)
from .env import env_prefix

CONFIG_FILE_ENV = "RELAY_CONFIG_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"base_url": OPENAI_DEFAULT_BASE_URL},
    "anthropic": {"base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "openrouter": {"base_url": OPENROUTER_DEFAULT_BASE_URL},
    "openai-compatible": {},
    "custom-json": {},
}

ENV_FIELD_MAP = {
    "base_url": "BASE_URL",
    "model": "MODEL",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the external config file; re-read when the path changes."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(CONFIG_FILE_ENV)
    if _FILE_CACHE is not None and path == _FILE_CACHE_PATH:
        return _FILE_CACHE
    _FILE_CACHE_PATH = path
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    data: Any = {}
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = env_prefix(provider)
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val:
            out[field] = val
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider id.

    Unknown ids yield whatever the file/env layers supply (possibly ``{}``);
    registry lookups are what reject unknown providers.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_default_base_url(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("base_url")


__all__ = [
    "get_provider_config",
    "get_default_base_url",
    "DEFAULTS",
    "CONFIG_FILE_ENV",
]
