"""Custom JSON adapter for arbitrary single-endpoint completion services.

Wire contract::

    POST <base_url>
    {"model": ..., "system": ..., "prompt": "user: hi\\nassistant: ...",
     "temperature": ..., "max_tokens": ...}

    -> {"completion": "..."} | {"text": "..."} | {"message": "..."}

The base URL is the full endpoint. Unset fields are omitted from the body.
No secret is required; when the config references one that resolves it is
sent as a bearer token. ``list_models`` never touches the network.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..base.errors import ConfigurationError, ProviderError
from ..base.models import ChatCallbacks, ChatParams, ChatResult, HttpRequest, ProviderConfig, ProviderInfo, Usage
from ..base.provider_base import HttpChatProvider
from ..base.secrets import resolve_secret
from ..base.security import assert_url_allowed, sanitize_headers
from ..base.timeouts import get_timeout_config
from ..config.defaults import CUSTOM_FALLBACK_MODEL

BASE_URL_REQUIRED = "base URL required"
ANSWER_KEYS = ("completion", "text", "message")


def flatten_transcript(params: ChatParams) -> str:
    """Render messages as ``role: content`` lines."""
    return "\n".join(f"{m.role}: {m.content}" for m in params.messages)


def build_body(params: ChatParams) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "model": params.model,
        "system": params.system,
        "prompt": flatten_transcript(params),
        "temperature": params.temperature,
        "max_tokens": params.max_tokens,
    }
    return {k: v for k, v in body.items() if v is not None}


def build_headers(configured: Mapping[str, str], api_key: Optional[str]) -> Dict[str, str]:
    candidate: Dict[str, Optional[str]] = {"Content-Type": "application/json"}
    candidate.update(configured)
    allow = ["Content-Type", *configured.keys()]
    if api_key:
        candidate["Authorization"] = f"Bearer {api_key}"
        allow.append("Authorization")
    return sanitize_headers(candidate, allow)


def extract_answer(payload: Any) -> str:
    """Return the first present of ``completion`` / ``text`` / ``message``."""
    if not isinstance(payload, Mapping):
        return payload if isinstance(payload, str) else ""
    for key in ANSWER_KEYS:
        value = payload.get(key)
        if value is not None:
            return value if isinstance(value, str) else str(value)
    return ""


class CustomJsonProvider(HttpChatProvider):
    """Adapter for a configurable JSON completion endpoint."""

    default_info = ProviderInfo(id="custom-json", name="Custom HTTP (JSON)")

    async def list_models(self, config: ProviderConfig) -> List[str]:
        return self.fallback_models(config)

    def fallback_models(self, config: ProviderConfig) -> List[str]:
        return [config.default_model] if config.default_model else [CUSTOM_FALLBACK_MODEL]

    async def chat(
        self,
        config: ProviderConfig,
        params: ChatParams,
        callbacks: Optional[ChatCallbacks] = None,
    ) -> ChatResult:
        url = config.base(self._default_base_url)
        if not url:
            raise ConfigurationError(BASE_URL_REQUIRED, provider=self.info.id, model=params.model or None)
        assert_url_allowed(url)
        token = params.cancel_token
        if token is not None:
            token.raise_if_cancelled()
        api_key = await resolve_secret(config.secret_ref, self._secret_store)

        cbs = callbacks or ChatCallbacks()
        ctx = self._context(config, params.model)
        self._log_chat_start(ctx, params)
        req = HttpRequest(
            url=url,
            method="POST",
            headers=build_headers(config.headers, api_key),
            body=build_body(params),
            timeout_ms=get_timeout_config().chat_timeout_ms,
        )
        try:
            resp = await self._transport.request(req, None, token)
        except ProviderError as exc:
            self._log_chat_error(ctx, exc)
            raise
        text = extract_answer(resp.data)
        result = ChatResult(text=text, raw=resp.data)
        cbs.emit_delta(text)
        cbs.emit_done()
        self._log_chat_done(ctx, result)
        return result

    def usage_from_response(self, raw: Any) -> Optional[Usage]:
        return None


__all__ = ["CustomJsonProvider", "flatten_transcript", "build_body", "build_headers", "extract_answer"]
