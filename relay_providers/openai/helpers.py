"""Payload and header builders for the OpenAI-compatible adapter.

These helpers do no I/O. Field names are the Chat Completions wire names.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..base.models import ChatParams
from ..base.security import sanitize_headers

# Headers an OpenAI-compatible request may carry. ``HTTP-Referer`` and
# ``X-Title`` are the attribution headers OpenRouter reads.
ALLOWED_HEADERS = ("Authorization", "Content-Type", "HTTP-Referer", "X-Title")


def build_messages(params: ChatParams) -> List[Dict[str, str]]:
    """Return wire messages with the system prompt prepended as a ``system`` role."""
    messages: List[Dict[str, str]] = []
    if params.system:
        messages.append({"role": "system", "content": params.system})
    messages.extend(m.to_dict() for m in params.messages)
    return messages


def build_body(params: ChatParams) -> Dict[str, Any]:
    """Build the ``/v1/chat/completions`` body; unset sampling fields are omitted."""
    body: Dict[str, Any] = {"model": params.model, "messages": build_messages(params)}
    for key, value in (
        ("temperature", params.temperature),
        ("top_p", params.top_p),
        ("max_tokens", params.max_tokens),
    ):
        if value is not None:
            body[key] = value
    body["stream"] = bool(params.stream)
    return body


def build_headers(api_key: Optional[str], extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Merge configured headers under the adapter's own and filter to the allow-list.

    The bearer token and content type always win over configured values.
    """
    candidate: Dict[str, Optional[str]] = dict(extra or {})
    candidate["Content-Type"] = "application/json"
    if api_key:
        candidate["Authorization"] = f"Bearer {api_key}"
    return sanitize_headers(candidate, ALLOWED_HEADERS)


def extract_message_text(payload: Any) -> str:
    """Return ``choices[0].message.content`` or ``""``."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""


def extract_delta_text(frame: Any) -> Optional[str]:
    """Return ``choices[0].delta.content`` of one stream frame, if any."""
    try:
        content = frame["choices"][0]["delta"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) and content else None


__all__ = [
    "ALLOWED_HEADERS",
    "build_messages",
    "build_body",
    "build_headers",
    "extract_message_text",
    "extract_delta_text",
]
