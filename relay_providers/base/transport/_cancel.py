"""Race an awaitable against a cancellation token."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Optional, TypeVar

from ..cancellation import CancellationToken

T = TypeVar("T")


async def run_cancellable(aw: Awaitable[T], token: Optional[CancellationToken]) -> T:
    """Await ``aw`` unless ``token`` fires first.

    The token is checked before anything is scheduled. When it fires while
    ``aw`` is in flight, ``aw`` is cancelled and ``CancelledError`` (the
    transport error flavour) is raised. A result that is already available
    wins over a concurrent cancellation.
    """
    if token is None:
        return await aw
    token.raise_if_cancelled()
    task = asyncio.ensure_future(aw)
    waiter = asyncio.ensure_future(token.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        waiter.cancel()
        raise
    if task in done:
        waiter.cancel()
        await asyncio.gather(waiter, return_exceptions=True)
        return task.result()
    task.cancel()
    await asyncio.gather(task, return_exceptions=True)
    token.raise_if_cancelled()
    raise AssertionError("cancellation waiter finished without cancellation")  # pragma: no cover


__all__ = ["run_cancellable"]
