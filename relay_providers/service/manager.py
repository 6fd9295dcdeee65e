"""Provider manager: credential -> config, model listing and model choice.

``list_models`` propagates failures; ``choose_model`` and
``available_models`` are the two places that swallow them.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..base.dto import ProviderCredential
from ..base.errors import ProviderError, classify_exception
from ..base.factory import ProviderRegistry
from ..base.interfaces import ChatProvider, SecretStore, Transport
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ProviderConfig
from ..base.secrets import EnvSecretStore
from ..base.transport import select_transport
from .models_cache import ModelListCache


class ProviderManager:
    """Owns the registry, transport, secret store and model-list cache.

    Parameters:
        registry: Provider registry; the static default when omitted.
        transport: Transport handed to every adapter; chosen once via
            :func:`select_transport` when omitted.
        secret_store: Store adapters resolve secrets from; environment
            variables when omitted.
        cache: Model-list cache; a fresh six-hour cache when omitted.
    """

    def __init__(
        self,
        *,
        registry: Optional[ProviderRegistry] = None,
        transport: Optional[Transport] = None,
        secret_store: Optional[SecretStore] = None,
        cache: Optional[ModelListCache] = None,
    ) -> None:
        self.registry = registry or ProviderRegistry()
        self.transport = transport or select_transport()
        self.secret_store = secret_store or EnvSecretStore()
        self.cache = cache or ModelListCache()
        self._adapters: Dict[str, ChatProvider] = {}
        self._logger = get_logger("relay.service.manager")

    def adapter_for(self, credential: ProviderCredential) -> ChatProvider:
        """Return the (memoized) adapter for the credential's provider id."""
        entry = self.registry.get(credential.provider_id)
        adapter = self._adapters.get(entry.id)
        if adapter is None:
            adapter = self.registry.make(entry.id, self.transport, self.secret_store)
            self._adapters[entry.id] = adapter
        return adapter

    def ensure_config(self, credential: ProviderCredential) -> ProviderConfig:
        """Merge the credential's explicit fields over registry defaults.

        The secret reference is scoped to the credential when it names no
        credential of its own.
        """
        defaults = self.registry.get(credential.provider_id).defaults()
        ref = credential.secret_ref.to_ref() if credential.secret_ref else None
        if ref is not None and not ref.credential_id:
            ref = ref.scoped_to(credential.id)
        return ProviderConfig(
            base_url=credential.base_url or defaults.get("base_url"),
            secret_ref=ref,
            headers=dict(credential.headers or {}),
            default_model=credential.default_model or defaults.get("model"),
        )

    async def list_models(self, credential: ProviderCredential, force_refresh: bool = False) -> List[str]:
        """Return the credential's model list, served from cache when fresh.

        Non-empty adapter results replace the cache entry; failures propagate.
        """
        adapter = self.adapter_for(credential)
        ctx = LogContext(provider=adapter.info.id, credential_id=credential.id)
        if not force_refresh:
            cached = self.cache.get(credential.id)
            if cached:
                log_event(self._logger, "models.cache_hit", ctx, level=logging.DEBUG, count=len(cached))
                return cached
        models = await adapter.list_models(self.ensure_config(credential))
        if models:
            self.cache.put(credential.id, models)
        log_event(self._logger, "models.list", ctx, count=len(models), forced=force_refresh)
        return models

    async def available_models(self, credential: ProviderCredential) -> List[str]:
        """``list_models`` falling back to the adapter's static list on failure or empty."""
        adapter = self.adapter_for(credential)
        try:
            models = await self.list_models(credential)
        except ProviderError as exc:
            log_event(
                self._logger,
                "models.fallback",
                LogContext(provider=adapter.info.id, credential_id=credential.id),
                level=logging.WARNING,
                error_code=exc.code.value,
            )
            models = []
        return models or adapter.fallback_models(self.ensure_config(credential))

    async def choose_model(self, credential: ProviderCredential) -> str:
        """Configured default model, else the first listed model, else ``""``. Never raises."""
        try:
            default_model = self.ensure_config(credential).default_model
            if default_model:
                return default_model
            models = await self.list_models(credential)
        except Exception as exc:  # noqa: BLE001 - model choice never fails
            log_event(
                self._logger,
                "models.choose_failed",
                LogContext(provider=credential.provider_id, credential_id=credential.id),
                level=logging.WARNING,
                error_code=classify_exception(exc).value,
            )
            return ""
        return models[0] if models else ""


__all__ = ["ProviderManager"]
