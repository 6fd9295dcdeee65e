"""OpenAI-compatible adapter over raw HTTP.

Serves every registry id that speaks the Chat Completions wire format
(``openai``, ``openrouter``, ``openai-compatible``); the registry passes a
per-id identity and default base URL.

Response handling:
- ``text/event-stream`` bodies are scanned for ``data: `` frames as transport
  chunks arrive; each ``choices[0].delta.content`` is one delta.
- A JSON object body is emitted as one delta from
  ``choices[0].message.content`` with usage mapped.
- Any other body is surfaced as raw text in one delta.

Failure modes:
- Disallowed base URL: ``SecurityError`` before the secret is resolved.
- No resolvable secret: ``ConfigurationError("missing credential")`` before
  any network call.
- Transport failures propagate unchanged; nothing is retried.
"""

from __future__ import annotations

import json
from typing import Any, List, Mapping, Optional

from ..base.errors import ProviderError
from ..base.logging import log_event
from ..base.models import ChatCallbacks, ChatParams, ChatResult, HttpRequest, ProviderConfig, ProviderInfo, Usage
from ..base.provider_base import HttpChatProvider
from ..base.secrets import require_secret, resolve_secret
from ..base.security import assert_url_allowed
from ..base.streaming import looks_like_event_stream
from ..base.timeouts import get_timeout_config
from ..base.tokens import map_openai_usage
from ..config.defaults import OPENAI_DEFAULT_BASE_URL, OPENAI_FALLBACK_MODELS
from ..base.utils import extract_model_ids
from .helpers import build_body, build_headers, extract_message_text
from .stream_helpers import OpenAIStreamAccumulator


class OpenAICompatibleProvider(HttpChatProvider):
    """Chat Completions adapter (``POST {base}/v1/chat/completions``)."""

    default_info = ProviderInfo(id="openai-compatible", name="OpenAI-Compatible")

    def __init__(self, transport, secret_store, *, info=None, default_base_url=None) -> None:
        super().__init__(
            transport,
            secret_store,
            info=info,
            default_base_url=default_base_url or OPENAI_DEFAULT_BASE_URL,
        )

    async def list_models(self, config: ProviderConfig) -> List[str]:
        """GET ``{base}/v1/models`` and return ``data[].id``.

        The bearer token is sent only when the secret resolves; local servers
        often need none.
        """
        url = f"{config.base(self._default_base_url)}/v1/models"
        assert_url_allowed(url)
        api_key = await resolve_secret(config.secret_ref, self._secret_store)
        req = HttpRequest(
            url=url,
            method="GET",
            headers=build_headers(api_key, config.headers),
            timeout_ms=get_timeout_config().models_timeout_ms,
        )
        resp = await self._transport.request(req)
        ids = extract_model_ids(resp.data)
        log_event(self._logger, "models.list", self._context(config), count=len(ids))
        return ids

    def fallback_models(self, config: ProviderConfig) -> List[str]:
        return list(OPENAI_FALLBACK_MODELS)

    async def chat(
        self,
        config: ProviderConfig,
        params: ChatParams,
        callbacks: Optional[ChatCallbacks] = None,
    ) -> ChatResult:
        url = f"{config.base(self._default_base_url)}/v1/chat/completions"
        assert_url_allowed(url)
        token = params.cancel_token
        if token is not None:
            token.raise_if_cancelled()
        api_key = await require_secret(config.secret_ref, self._secret_store, provider=self.info.id)

        cbs = callbacks or ChatCallbacks()
        ctx = self._context(config, params.model)
        self._log_chat_start(ctx, params)
        stream = OpenAIStreamAccumulator(cbs.emit_delta, cancel_token=token, logger=self._logger, ctx=ctx)
        req = HttpRequest(
            url=url,
            method="POST",
            headers=build_headers(api_key, config.headers),
            body=build_body(params),
            timeout_ms=get_timeout_config().chat_timeout_ms,
            stream=params.stream,
        )
        try:
            resp = await self._transport.request(req, stream.feed if params.stream else None, token)
            result = self._to_result(resp.data, stream, cbs)
        except ProviderError as exc:
            self._log_chat_error(ctx, exc)
            raise
        cbs.emit_done()
        self._log_chat_done(ctx, result)
        return result

    def usage_from_response(self, raw: Any) -> Optional[Usage]:
        return map_openai_usage(raw.get("usage")) if isinstance(raw, Mapping) else None

    @staticmethod
    def _to_result(data: Any, stream: OpenAIStreamAccumulator, cbs: ChatCallbacks) -> ChatResult:
        stream.close()
        if stream.saw_frames:
            return ChatResult(text=stream.text, usage=stream.usage)
        if isinstance(data, str) and looks_like_event_stream(data):
            stream.feed(data)
            stream.close()
            return ChatResult(text=stream.text, usage=stream.usage)
        if isinstance(data, Mapping):
            text = extract_message_text(data)
            cbs.emit_delta(text)
            return ChatResult(text=text, usage=map_openai_usage(data.get("usage")), raw=data)
        if data is None:
            text = ""
        else:
            text = data if isinstance(data, str) else json.dumps(data, ensure_ascii=False)
        cbs.emit_delta(text)
        return ChatResult(text=text)


__all__ = ["OpenAICompatibleProvider"]
