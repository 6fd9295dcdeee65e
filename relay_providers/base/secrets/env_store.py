"""Environment-backed SecretStore.

Resolves a reference to the provider's API key environment variable (see
:mod:`relay_providers.config.env`). Useful for headless deployments where the
vault is the process environment.
"""

from __future__ import annotations

from typing import Optional

from ...config.env import resolve_provider_key
from ..models import SecretRef


class EnvSecretStore:
    """Read API keys from ``<PROVIDER>_API_KEY`` style variables."""

    async def get(self, ref: SecretRef) -> Optional[str]:
        value, _ = resolve_provider_key(ref.provider_id)
        return value


__all__ = ["EnvSecretStore"]
