"""Shared plumbing for HTTP-backed chat adapters.

Holds the injected transport and secret store, the adapter identity and
logger, and the normalized ``chat.start`` / ``chat.done`` / ``chat.error``
events every variant emits. Concrete adapters implement ``list_models``,
``fallback_models``, ``chat`` and ``usage_from_response``.

Secrets are never stored here; each call resolves its own.
"""

from __future__ import annotations

import logging
from typing import Optional

from .errors import ProviderError
from .interfaces import SecretStore, Transport
from .logging import LogContext, get_logger, normalized_log_event
from .models import ChatParams, ChatResult, ProviderConfig, ProviderInfo


class HttpChatProvider:
    """Base class for the adapter variants.

    Parameters:
        transport: Transport used for every network call.
        secret_store: Store consulted for ``config.secret_ref``.
        info: Adapter identity; subclasses provide a default.
        default_base_url: Base URL used when the config carries none.
    """

    default_info: ProviderInfo = ProviderInfo(id="-", name="-")

    def __init__(
        self,
        transport: Transport,
        secret_store: SecretStore,
        *,
        info: Optional[ProviderInfo] = None,
        default_base_url: Optional[str] = None,
    ) -> None:
        self._transport = transport
        self._secret_store = secret_store
        self.info = info or self.default_info
        self._default_base_url = default_base_url or ""
        self._logger = get_logger(f"relay.providers.{self.info.id}")

    def _context(self, config: ProviderConfig, model: Optional[str] = None) -> LogContext:
        ref = config.secret_ref
        return LogContext(
            provider=self.info.id,
            model=model or None,
            credential_id=ref.credential_id if ref else None,
        )

    def _log_chat_start(self, ctx: LogContext, params: ChatParams) -> None:
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            stream=params.stream,
            messages=len(params.messages),
            has_system=bool(params.system),
        )

    def _log_chat_done(self, ctx: LogContext, result: ChatResult) -> None:
        normalized_log_event(
            self._logger,
            "chat.done",
            ctx,
            phase="finalize",
            emitted=bool(result.text),
            tokens=result.usage,
            chars=len(result.text),
        )

    def _log_chat_error(self, ctx: LogContext, exc: ProviderError) -> None:
        normalized_log_event(
            self._logger,
            "chat.error",
            ctx,
            phase="error",
            error_code=exc.code.value,
            level=logging.WARNING,
            status=getattr(exc, "status", None),
            error=exc.message,
        )


__all__ = ["HttpChatProvider"]
