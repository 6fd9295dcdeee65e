"""
ChatResult: what an adapter returns for a completed turn.

``raw`` holds the decoded provider payload for diagnostics and is excluded
from ``to_dict`` so it is not logged or persisted by accident.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .usage import Usage


@dataclass
class ChatResult:
    """Final outcome of a chat call.

    Attributes:
        text: Full generated text (concatenation of all deltas).
        usage: Normalized usage, ``None`` when the provider sent none.
        raw: Decoded provider response, when one was available.
    """

    text: str
    usage: Optional[Usage] = None
    raw: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "usage": self.usage.to_dict() if self.usage else None,
        }


__all__ = ["ChatResult"]
