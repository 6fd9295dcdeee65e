"""Provider registry.

Purpose
-------
Map provider ids to adapter classes and their configuration defaults.
Adapters are imported lazily with ``importlib`` so that looking up one id
never imports the others.

Scope
-----
Registered ids: ``openai``, ``anthropic``, ``openrouter``,
``openai-compatible`` and ``custom-json``. The first three OpenAI-style ids
share one adapter class and differ only in identity and default base URL.

Defaults are read from :func:`relay_providers.config.get_provider_config` at
lookup time, so ``<PROVIDER>_BASE_URL`` overrides and the external config
file apply without rebuilding the registry. A default base URL is used only
when the credential carries none.

Failure modes
-------------
Unknown ids raise :class:`UnknownProviderError`. There are no retries or
fallbacks here.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from typing import Any, Dict, List, Optional, Type

from ..config import get_provider_config
from .errors import UnknownProviderError
from .interfaces import ChatProvider, SecretStore, Transport
from .models import ProviderInfo


@dataclass(frozen=True)
class ProviderEntry:
    """One registry row."""

    id: str
    name: str
    module: str
    class_name: str

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(id=self.id, name=self.name)

    def defaults(self) -> Dict[str, Any]:
        """Current configuration defaults (``base_url``, ``model``) for this id."""
        return get_provider_config(self.id)

    def load_class(self) -> Type[Any]:
        return getattr(import_module(self.module), self.class_name)


_OPENAI_MODULE = "relay_providers.openai.client"

_ENTRIES: Dict[str, ProviderEntry] = {
    entry.id: entry
    for entry in (
        ProviderEntry("openai", "OpenAI", _OPENAI_MODULE, "OpenAICompatibleProvider"),
        ProviderEntry("anthropic", "Anthropic", "relay_providers.anthropic.client", "AnthropicProvider"),
        ProviderEntry("openrouter", "OpenRouter", _OPENAI_MODULE, "OpenAICompatibleProvider"),
        ProviderEntry("openai-compatible", "OpenAI-Compatible", _OPENAI_MODULE, "OpenAICompatibleProvider"),
        ProviderEntry("custom-json", "Custom HTTP (JSON)", "relay_providers.custom.client", "CustomJsonProvider"),
    )
}


class ProviderRegistry:
    """Static registry of adapter variants.

    Parameters:
        entries: Optional replacement rows (tests register fakes this way).
    """

    def __init__(self, entries: Optional[Dict[str, ProviderEntry]] = None) -> None:
        self._entries = dict(entries if entries is not None else _ENTRIES)

    def supported(self) -> List[str]:
        return list(self._entries)

    def get(self, provider_id: str) -> ProviderEntry:
        """Return the entry for ``provider_id`` or raise :class:`UnknownProviderError`."""
        entry = self._entries.get((provider_id or "").strip().lower())
        if entry is None:
            raise UnknownProviderError(provider_id)
        return entry

    def make(self, provider_id: str, transport: Transport, secret_store: SecretStore) -> ChatProvider:
        """Instantiate the adapter for ``provider_id`` with the given collaborators."""
        entry = self.get(provider_id)
        klass = entry.load_class()
        return klass(
            transport,
            secret_store,
            info=entry.info,
            default_base_url=entry.defaults().get("base_url"),
        )


__all__ = ["ProviderRegistry", "ProviderEntry"]
