"""Secret resolution and reference secret stores."""

from .chained_store import ChainedSecretStore
from .env_store import EnvSecretStore
from .memory_store import InMemorySecretStore
from .resolver import MISSING_CREDENTIAL, require_secret, resolve_secret

__all__ = [
    "resolve_secret",
    "require_secret",
    "MISSING_CREDENTIAL",
    "InMemorySecretStore",
    "EnvSecretStore",
    "ChainedSecretStore",
]
