"""Translate transport DTOs to and from httpx objects."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

import httpx

from ..models import HttpRequest


def encode_body(body: Any, headers: Dict[str, str]) -> Optional[str]:
    """Return the request body text, setting ``Content-Type`` for JSON payloads."""
    if body is None:
        return None
    if isinstance(body, str):
        return body
    headers["Content-Type"] = "application/json"
    return json.dumps(body, ensure_ascii=False)


def build_httpx_request(client: httpx.AsyncClient, req: HttpRequest) -> httpx.Request:
    """Build (but do not send) the ``httpx.Request`` for ``req``."""
    headers = dict(req.headers)
    content = encode_body(req.body, headers)
    timeout = httpx.Timeout(req.timeout_ms / 1000) if req.timeout_ms else httpx.Timeout(None)
    return client.build_request(
        req.method,
        req.url,
        headers=headers,
        params=req.clean_query() or None,
        content=content,
        timeout=timeout,
    )


def request_to_payload(req: HttpRequest, request_id: Optional[str]) -> Dict[str, Any]:
    """Serialize ``req`` into the host ``api_request`` command payload."""
    return {
        "url": req.url,
        "method": req.method,
        "headers": dict(req.headers),
        "query": req.clean_query() or None,
        "body": req.body,
        "timeoutMs": req.timeout_ms,
        "stream": req.stream,
        "requestId": request_id,
    }


def payload_to_request(payload: Mapping[str, Any]) -> HttpRequest:
    """Inverse of :func:`request_to_payload` (used by in-process hosts)."""
    return HttpRequest(
        url=str(payload["url"]),
        method=payload.get("method") or "POST",
        headers=dict(payload.get("headers") or {}),
        query=dict(payload.get("query") or {}) or None,
        body=payload.get("body"),
        timeout_ms=payload.get("timeoutMs"),
        stream=bool(payload.get("stream")),
    )


__all__ = ["encode_body", "build_httpx_request", "request_to_payload", "payload_to_request"]
