"""Mutable state behind a :class:`CancellationToken`.

Holds the cancel flag and reason together with everything that must be
notified when the flag trips: linked child tokens and the lazily created
``asyncio.Event`` that ``wait()`` suspends on.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from .cancellation_token import CancellationToken


@dataclass
class TokenState:
    """Flag, reason and dependents of one token."""

    cancelled: bool = False
    reason: Optional[str] = None
    children: List["CancellationToken"] = field(default_factory=list)
    event: Optional[asyncio.Event] = None

    def trip(self, reason: Optional[str]) -> Optional[Tuple[List["CancellationToken"], Optional[asyncio.Event]]]:
        """Mark cancelled; return ``(children, event)`` to notify, or ``None`` if already tripped."""
        if self.cancelled:
            return None
        self.cancelled = True
        self.reason = reason
        return list(self.children), self.event

    def ensure_event(self) -> asyncio.Event:
        """Return the wait event, creating it (already set when tripped) on first use."""
        if self.event is None:
            self.event = asyncio.Event()
            if self.cancelled:
                self.event.set()
        return self.event


__all__ = ["TokenState"]
