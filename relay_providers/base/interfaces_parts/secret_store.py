"""SecretStore Protocol (single-class module)."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ..models import SecretRef


@runtime_checkable
class SecretStore(Protocol):
    """Narrow view of the secure vault.

    Implementations return ``None`` when no value is stored for the reference.
    """

    async def get(self, ref: SecretRef) -> Optional[str]:
        ...
