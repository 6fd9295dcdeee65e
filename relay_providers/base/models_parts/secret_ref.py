"""
SecretRef: opaque pointer to a credential value held by a secret store.

The reference never carries the plaintext secret; it is resolved just in time
for one request by :func:`relay_providers.base.secrets.resolve_secret`.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class SecretRef:
    """Identifies a secret in the vault.

    Attributes:
        provider_id: Provider the secret belongs to (e.g., ``"openai"``).
        key: Secret name within the provider (e.g., ``"apiKey"``).
        credential_id: Optional credential scope; when unset the provider-wide
            secret is used.
    """

    provider_id: str
    key: str
    credential_id: Optional[str] = None

    def scoped_to(self, credential_id: str) -> "SecretRef":
        """Return a copy bound to ``credential_id`` unless already scoped."""
        if self.credential_id:
            return self
        return replace(self, credential_id=credential_id)


__all__ = ["SecretRef"]
