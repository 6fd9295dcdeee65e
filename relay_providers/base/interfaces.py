"""
Provider-agnostic interfaces (Protocols) for the relay layer.

Re-exports Protocols split into single-class modules under
``relay_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import (
    ChannelHandler,
    ChatProvider,
    HostBridge,
    SecretStore,
    StreamChunkHandler,
    Transport,
    Unlisten,
)

__all__ = [
    "ChatProvider",
    "SecretStore",
    "Transport",
    "StreamChunkHandler",
    "HostBridge",
    "ChannelHandler",
    "Unlisten",
]
