"""
ChatParams: normalized request parameters for one chat turn.

Adapters map these fields onto each vendor's wire format. Sampling fields left
as ``None`` are omitted from request bodies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from .message import Message

if TYPE_CHECKING:
    from ..cancellation import CancellationToken


@dataclass
class ChatParams:
    """Parameters for a single chat completion.

    Attributes:
        model: Target model identifier (may be empty when nothing resolved).
        messages: Ordered conversation.
        temperature: Sampling temperature.
        top_p: Nucleus sampling mass.
        max_tokens: Completion token cap.
        system: System prompt kept apart from ``messages``.
        stream: Request incremental delivery.
        cancel_token: Cooperative cancellation token for the turn.
    """

    model: str
    messages: List[Message] = field(default_factory=list)
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None
    system: Optional[str] = None
    stream: bool = False
    cancel_token: Optional["CancellationToken"] = None


__all__ = ["ChatParams"]
