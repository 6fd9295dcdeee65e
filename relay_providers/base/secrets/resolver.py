"""Just-in-time secret resolution.

Adapters call :func:`resolve_secret` inside each request and keep the value
in a local; it is never stored on the adapter, the config, or a log line.
:func:`require_secret` turns an absent value into the "missing credential"
configuration error before any network call.
"""

from __future__ import annotations

from typing import Optional

from ..errors import ConfigurationError
from ..interfaces import SecretStore
from ..models import SecretRef

MISSING_CREDENTIAL = "missing credential"


async def resolve_secret(ref: Optional[SecretRef], store: SecretStore) -> Optional[str]:
    """Return the secret value for ``ref`` or ``None`` (no ref, or nothing stored)."""
    if ref is None:
        return None
    value = await store.get(ref)
    return value or None


async def require_secret(ref: Optional[SecretRef], store: SecretStore, *, provider: str = "-") -> str:
    """Resolve ``ref`` or raise ``ConfigurationError("missing credential")``."""
    value = await resolve_secret(ref, store)
    if value is None:
        raise ConfigurationError(MISSING_CREDENTIAL, provider=provider)
    return value


__all__ = ["resolve_secret", "require_secret", "MISSING_CREDENTIAL"]
