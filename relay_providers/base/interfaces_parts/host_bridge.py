"""HostBridge Protocol (single-class module).

The privileged host process the delegated transport hands calls to. Commands
are request/response; named channels push raw text chunks.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping, Protocol, runtime_checkable

ChannelHandler = Callable[[str], None]
Unlisten = Callable[[], Awaitable[None]]


@runtime_checkable
class HostBridge(Protocol):
    """Command invocation plus named-channel subscription."""

    async def invoke(self, command: str, payload: Mapping[str, Any]) -> Any:
        """Run ``command`` in the host and return its result."""
        ...

    async def listen(self, channel: str, handler: ChannelHandler) -> Unlisten:
        """Subscribe ``handler`` to ``channel``; await the returned callable to unsubscribe."""
        ...
