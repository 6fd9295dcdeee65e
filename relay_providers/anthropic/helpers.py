"""Payload and header builders for the Anthropic Messages adapter."""

from __future__ import annotations

from typing import Any, Dict, List

from ..base.models import ChatParams
from ..base.security import sanitize_headers
from ..config.defaults import ANTHROPIC_API_VERSION, ANTHROPIC_DEFAULT_MAX_TOKENS

ALLOWED_HEADERS = ("x-api-key", "anthropic-version", "Content-Type")


def build_headers(api_key: str) -> Dict[str, str]:
    return sanitize_headers(
        {
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_API_VERSION,
            "Content-Type": "application/json",
        },
        ALLOWED_HEADERS,
    )


def build_body(params: ChatParams) -> Dict[str, Any]:
    """Build the ``/v1/messages`` body.

    The system prompt travels as a single text block and is omitted when
    absent. ``max_tokens`` is required by the API and defaults to 1024.
    """
    body: Dict[str, Any] = {
        "model": params.model,
        "messages": [m.to_dict() for m in params.messages],
    }
    if params.system:
        body["system"] = [{"type": "text", "text": params.system}]
    body["max_tokens"] = params.max_tokens if params.max_tokens is not None else ANTHROPIC_DEFAULT_MAX_TOKENS
    if params.temperature is not None:
        body["temperature"] = params.temperature
    if params.top_p is not None:
        body["top_p"] = params.top_p
    return body


def extract_text(payload: Any) -> str:
    """Concatenate ``content[].text`` across all content blocks."""
    content = payload.get("content") if isinstance(payload, dict) else None
    if not isinstance(content, list):
        return ""
    parts: List[str] = []
    for block in content:
        if isinstance(block, dict) and isinstance(block.get("text"), str):
            parts.append(block["text"])
    return "".join(parts)


__all__ = ["ALLOWED_HEADERS", "build_headers", "build_body", "extract_text"]
