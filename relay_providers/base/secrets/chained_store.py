"""SecretStore that consults several stores in order."""

from __future__ import annotations

from typing import Optional, Sequence

from ..interfaces import SecretStore
from ..models import SecretRef


class ChainedSecretStore:
    """First non-``None`` value across ``stores`` wins."""

    def __init__(self, stores: Sequence[SecretStore]) -> None:
        self._stores = list(stores)

    async def get(self, ref: SecretRef) -> Optional[str]:
        for store in self._stores:
            value = await store.get(ref)
            if value is not None:
                return value
        return None


__all__ = ["ChainedSecretStore"]
