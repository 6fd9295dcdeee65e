"""ProviderInfo: identity of an adapter variant."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderInfo:
    """Adapter id (e.g., ``"openai-compatible"``) and display name."""

    id: str
    name: str


__all__ = ["ProviderInfo"]
