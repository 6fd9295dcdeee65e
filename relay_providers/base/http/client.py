"""Shared HTTP client pool for the direct transport and loopback host.

Purpose:
    Provide a pool of reusable ``httpx.AsyncClient`` instances to avoid
    per-call allocations and keep connections warm across turns.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose, event loop)``; an async
      client's connections belong to the loop that opened them, so each loop
      gets its own instances.
    - Entries whose loop has closed or been collected are evicted on the next
      lookup, so short-lived loops (``asyncio.run`` per call) do not grow the
      pool.
    - Await :func:`close_all_clients` at application shutdown or in test
      teardown to release connections.

Timeouts are not configured on pooled clients; every request carries its own
``timeout_ms`` (see :mod:`relay_providers.base.timeouts`).
"""

from __future__ import annotations

import asyncio
import threading
import weakref
from typing import Callable, Dict, Optional, Tuple

import httpx

_ClientKey = Tuple[Optional[str], str, int]
_LoopRef = Callable[[], Optional[asyncio.AbstractEventLoop]]

_CLIENTS: Dict[_ClientKey, Tuple[httpx.AsyncClient, Optional[_LoopRef]]] = {}
_LOCK = threading.RLock()


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _is_stale(loop_ref: Optional[_LoopRef]) -> bool:
    if loop_ref is None:
        return False
    loop = loop_ref()
    return loop is None or loop.is_closed()


def _evict_stale() -> None:
    """Drop clients bound to loops that are gone; caller holds ``_LOCK``."""
    for key in [k for k, (_, ref) in _CLIENTS.items() if _is_stale(ref)]:
        del _CLIENTS[key]


def _lookup(key: _ClientKey, loop: Optional[asyncio.AbstractEventLoop]) -> Optional[httpx.AsyncClient]:
    entry = _CLIENTS.get(key)
    if entry is None:
        return None
    client, loop_ref = entry
    owner = loop_ref() if loop_ref is not None else None
    # A recycled id() can point at a new loop; only the owning loop may reuse.
    if client.is_closed or owner is not loop:
        return None
    return client


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the given base URL and purpose.

    Parameters:
        base_url: Optional base URL set on the client; ``None`` groups clients
            under a shared key (absolute URLs are used per request).
        purpose: Short discriminator for separate pools (e.g., ``"direct"``,
            ``"host"``).
    """
    loop = _running_loop()
    key = (base_url, purpose, id(loop) if loop is not None else 0)
    client = _lookup(key, loop)
    if client is not None:
        return client

    with _LOCK:
        _evict_stale()
        client = _lookup(key, loop)
        if client is not None:
            return client
        client = httpx.AsyncClient(base_url=base_url) if base_url else httpx.AsyncClient()
        _CLIENTS[key] = (client, weakref.ref(loop) if loop is not None else None)
        return client


def pooled_client_count() -> int:
    """Number of clients currently held by the pool."""
    with _LOCK:
        return len(_CLIENTS)


async def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        clients = [client for client, _ in _CLIENTS.values()]
        _CLIENTS.clear()
    for c in clients:
        try:
            await c.aclose()
        except (httpx.HTTPError, RuntimeError):  # nosec B110 - best-effort shutdown
            # A client bound to an already closed loop cannot be closed cleanly.
            continue


__all__ = ["get_httpx_client", "close_all_clients", "pooled_client_count"]
