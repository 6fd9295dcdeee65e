"""Cooperative cancellation token threaded through a chat turn.

The runner, the adapter and the transport observe the same token. Code can
poll with ``raise_if_cancelled`` between steps, or ``await token.wait()`` to
race an in-flight network call against cancellation (see
``relay_providers.base.transport._cancel``).
"""

from __future__ import annotations

import asyncio
from threading import Lock
from typing import Optional

from ..errors import CancelledError
from .state import TokenState


class CancellationToken:
    """Cancel flag with parent-to-child cascading.

    Cancelling a token cancels every token derived from it via :meth:`child`;
    cancelling a child leaves the parent untouched. ``cancel`` must run on the
    event loop thread when coroutines are waiting on the token.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._state = TokenState()
        self._lock = Lock()
        self._parent: Optional["CancellationToken"] = None
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._state.cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._state.reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation; idempotent, the first reason wins."""
        with self._lock:
            tripped = self._state.trip(reason)
        if tripped is None:
            return
        children, event = tripped
        if event is not None:
            event.set()
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Attach ``token`` so this token's cancellation cascades to it."""
        with self._lock:
            self._state.children.append(token)
            already, reason = self._state.cancelled, self._state.reason
        token._parent = self
        if already:
            token.cancel(reason)
        return token

    def unlink_child(self, token: "CancellationToken") -> None:
        """Stop cascading to ``token``; a no-op when it is not linked here."""
        with self._lock:
            if token in self._state.children:
                self._state.children.remove(token)
        if token._parent is self:
            token._parent = None

    def detach(self) -> None:
        """Unlink this token from its parent once the work it guarded is over."""
        parent = self._parent
        if parent is not None:
            parent.unlink_child(self)

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` carrying the cancel reason."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    async def wait(self) -> None:
        """Suspend until the token is cancelled (returns at once if it already is)."""
        with self._lock:
            event = self._state.ensure_event()
        await event.wait()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self.cancelled}, "
            f"reason={self.reason!r}, children={len(self._state.children)})"
        )


__all__ = ["CancellationToken"]
