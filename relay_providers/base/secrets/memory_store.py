"""In-memory implementation of SecretStore.

Reference implementation for development, tests and hosts without a system
keychain. Lookup mirrors the vault: the credential-scoped entry first, then
the provider-wide entry for the same key.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from ..models import SecretRef

_DEFAULT_SCOPE = "default"


class InMemorySecretStore:
    """Dictionary-backed secret store.

    Not thread-safe; intended for a single event loop.
    """

    def __init__(self) -> None:
        self._values: Dict[Tuple[str, str, str], str] = {}

    @staticmethod
    def _key(ref: SecretRef) -> Tuple[str, str, str]:
        return (ref.provider_id, ref.credential_id or _DEFAULT_SCOPE, ref.key)

    async def get(self, ref: SecretRef) -> Optional[str]:
        """Return the credential-scoped value, else the provider-wide value."""
        value = self._values.get(self._key(ref))
        if value is None and ref.credential_id:
            value = self._values.get((ref.provider_id, _DEFAULT_SCOPE, ref.key))
        return value

    def set(self, ref: SecretRef, value: Optional[str]) -> None:
        """Store ``value`` for ``ref``; ``None`` deletes the entry."""
        if value is None:
            self._values.pop(self._key(ref), None)
        else:
            self._values[self._key(ref)] = value

    def __repr__(self) -> str:  # pragma: no cover - never show values
        return f"InMemorySecretStore(entries={len(self._values)})"


__all__ = ["InMemorySecretStore"]
