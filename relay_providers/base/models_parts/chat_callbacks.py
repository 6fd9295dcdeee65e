"""
ChatCallbacks: fire-and-forget hooks invoked by adapters.

Return values are ignored. ``emit_delta`` and ``emit_done`` tolerate missing
hooks so adapters never branch on their presence.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class ChatCallbacks:
    """Optional delta / completion hooks for one chat call."""

    on_delta: Optional[Callable[[str], object]] = None
    on_done: Optional[Callable[[], object]] = None

    def emit_delta(self, text: str) -> None:
        if self.on_delta is not None:
            self.on_delta(text)

    def emit_done(self) -> None:
        if self.on_done is not None:
            self.on_done()


__all__ = ["ChatCallbacks"]
