"""ChatProvider Protocol (single-class module).

The capability every adapter variant implements: list models and run a chat
turn against one vendor wire format.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, runtime_checkable

from ..models import ChatCallbacks, ChatParams, ChatResult, ProviderConfig, ProviderInfo, Usage


@runtime_checkable
class ChatProvider(Protocol):
    """Uniform adapter contract over incompatible vendor APIs."""

    info: ProviderInfo

    async def list_models(self, config: ProviderConfig) -> List[str]:
        """Return model ids from the vendor.

        Failures propagate; callers decide whether to use ``fallback_models``.
        """
        ...

    def fallback_models(self, config: ProviderConfig) -> List[str]:
        """Static model list a caller may use when listing fails."""
        ...

    async def chat(
        self,
        config: ProviderConfig,
        params: ChatParams,
        callbacks: Optional[ChatCallbacks] = None,
    ) -> ChatResult:
        """Run one completion, emitting deltas through ``callbacks``.

        ``callbacks.on_done`` is called exactly once on success.
        """
        ...

    def usage_from_response(self, raw: Any) -> Optional[Usage]:
        """Map a decoded vendor response to canonical usage."""
        ...
