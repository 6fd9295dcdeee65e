"""
HttpResponse: transport-level response.

``data`` is the decoded JSON body when the body parses as JSON, otherwise the
raw body text (for example a ``text/event-stream`` payload).
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class HttpResponse:
    """Result of a completed HTTP call."""

    status: int
    ok: bool
    headers: Dict[str, str] = field(default_factory=dict)
    data: Any = None

    @staticmethod
    def decode_body(text: str) -> Any:
        """Parse ``text`` as JSON, returning the text itself when it is not JSON."""
        try:
            return json.loads(text)
        except ValueError:
            return text


__all__ = ["HttpResponse"]
