"""Single-class Protocol modules re-exported by ``relay_providers.base.interfaces``."""

from .chat_provider import ChatProvider
from .host_bridge import ChannelHandler, HostBridge, Unlisten
from .secret_store import SecretStore
from .transport import StreamChunkHandler, Transport

__all__ = [
    "ChatProvider",
    "HostBridge",
    "ChannelHandler",
    "Unlisten",
    "SecretStore",
    "Transport",
    "StreamChunkHandler",
]
