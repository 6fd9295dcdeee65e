"""
HttpRequest: transport-level request description.

Adapters build these; transports execute them. ``body`` is JSON-encoded when
it is not already a string.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Union

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


@dataclass
class HttpRequest:
    """A single HTTP call.

    Attributes:
        url: Absolute URL (already allow-listed by the adapter).
        method: HTTP method; ``POST`` by default.
        headers: Sanitized request headers.
        query: Query parameters; ``None`` values are dropped.
        body: JSON-serializable payload or a pre-encoded string.
        timeout_ms: Per-request timeout in milliseconds.
        stream: Whether the caller wants chunks delivered as they arrive.
    """

    url: str
    method: HttpMethod = "POST"
    headers: Dict[str, str] = field(default_factory=dict)
    query: Optional[Dict[str, Union[str, int, float, bool, None]]] = None
    body: Any = None
    timeout_ms: Optional[int] = None
    stream: bool = False

    def clean_query(self) -> Dict[str, str]:
        """Return query params with ``None`` dropped and values stringified."""
        out: Dict[str, str] = {}
        for key, value in (self.query or {}).items():
            if value is None:
                continue
            out[key] = str(value).lower() if isinstance(value, bool) else str(value)
        return out


__all__ = ["HttpRequest", "HttpMethod"]
