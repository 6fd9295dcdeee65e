"""Anthropic Messages adapter over raw HTTP.

The whole response is read before anything is emitted: ``params.stream`` is
ignored and exactly one delta carries the full text, followed by
``on_done``.

Usage totals are derived (``input + output``), unlike the OpenAI-compatible
adapter which passes the reported total through.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from ..base.errors import ProviderError
from ..base.logging import log_event
from ..base.models import ChatCallbacks, ChatParams, ChatResult, HttpRequest, ProviderConfig, ProviderInfo, Usage
from ..base.provider_base import HttpChatProvider
from ..base.secrets import require_secret
from ..base.security import assert_url_allowed
from ..base.timeouts import get_timeout_config
from ..base.tokens import map_anthropic_usage
from ..config.defaults import ANTHROPIC_DEFAULT_BASE_URL, ANTHROPIC_FALLBACK_MODELS
from ..base.utils import extract_model_ids
from .helpers import build_body, build_headers, extract_text


class AnthropicProvider(HttpChatProvider):
    """Anthropic adapter (``POST {base}/v1/messages``)."""

    default_info = ProviderInfo(id="anthropic", name="Anthropic")

    def __init__(self, transport, secret_store, *, info=None, default_base_url=None) -> None:
        super().__init__(
            transport,
            secret_store,
            info=info,
            default_base_url=default_base_url or ANTHROPIC_DEFAULT_BASE_URL,
        )

    async def list_models(self, config: ProviderConfig) -> List[str]:
        """GET ``{base}/v1/models`` with the same auth headers as chat."""
        url = f"{config.base(self._default_base_url)}/v1/models"
        assert_url_allowed(url)
        api_key = await require_secret(config.secret_ref, self._secret_store, provider=self.info.id)
        req = HttpRequest(
            url=url,
            method="GET",
            headers=build_headers(api_key),
            timeout_ms=get_timeout_config().models_timeout_ms,
        )
        resp = await self._transport.request(req)
        ids = extract_model_ids(resp.data)
        log_event(self._logger, "models.list", self._context(config), count=len(ids))
        return ids

    def fallback_models(self, config: ProviderConfig) -> List[str]:
        return list(ANTHROPIC_FALLBACK_MODELS)

    async def chat(
        self,
        config: ProviderConfig,
        params: ChatParams,
        callbacks: Optional[ChatCallbacks] = None,
    ) -> ChatResult:
        url = f"{config.base(self._default_base_url)}/v1/messages"
        assert_url_allowed(url)
        token = params.cancel_token
        if token is not None:
            token.raise_if_cancelled()
        api_key = await require_secret(config.secret_ref, self._secret_store, provider=self.info.id)

        cbs = callbacks or ChatCallbacks()
        ctx = self._context(config, params.model)
        self._log_chat_start(ctx, params)
        req = HttpRequest(
            url=url,
            method="POST",
            headers=build_headers(api_key),
            body=build_body(params),
            timeout_ms=get_timeout_config().chat_timeout_ms,
        )
        try:
            resp = await self._transport.request(req, None, token)
        except ProviderError as exc:
            self._log_chat_error(ctx, exc)
            raise
        data = resp.data
        text = extract_text(data)
        result = ChatResult(text=text, usage=self.usage_from_response(data), raw=data)
        cbs.emit_delta(text)
        cbs.emit_done()
        self._log_chat_done(ctx, result)
        return result

    def usage_from_response(self, raw: Any) -> Optional[Usage]:
        return map_anthropic_usage(raw.get("usage")) if isinstance(raw, Mapping) else None


__all__ = ["AnthropicProvider"]
