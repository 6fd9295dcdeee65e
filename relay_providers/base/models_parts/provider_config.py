"""
ProviderConfig: the per-turn configuration handed to an adapter.

Derived from a stored credential merged over registry defaults (see
``ProviderManager.ensure_config``). Not persisted.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from .secret_ref import SecretRef


@dataclass(frozen=True)
class ProviderConfig:
    """Adapter configuration for one turn.

    Attributes:
        base_url: API base URL; adapters append their endpoint suffix, except
            the custom JSON adapter which treats it as the full endpoint.
        secret_ref: Reference to the credential secret, if any.
        headers: Caller-supplied header overrides; adapters filter them through
            their header allow-list.
        default_model: Model configured on the credential.
    """

    base_url: Optional[str] = None
    secret_ref: Optional[SecretRef] = None
    headers: Dict[str, str] = field(default_factory=dict)
    default_model: Optional[str] = None

    def base(self, fallback: str = "") -> str:
        """Return the base URL (or ``fallback``) with one trailing slash stripped."""
        base = self.base_url or fallback
        return base[:-1] if base.endswith("/") else base


__all__ = ["ProviderConfig"]
