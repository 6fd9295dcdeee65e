"""In-memory model-list cache keyed by credential id.

The only state shared across turns. Entries are replaced whole on write and
read without locking; all access happens on one event loop.
"""

from __future__ import annotations

import time
from typing import Callable, Dict, List, Optional, Tuple

from ..config.defaults import MODELS_CACHE_TTL_SECONDS


class ModelListCache:
    """Credential id -> (models, fetched_at).

    Parameters:
        ttl_seconds: Freshness window; older entries are treated as absent.
        clock: Monotonic seconds source (tests inject a fake).
    """

    def __init__(
        self,
        ttl_seconds: float = MODELS_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[List[str], float]] = {}

    def get(self, key: str, max_age: Optional[float] = None) -> Optional[List[str]]:
        """Return a copy of the fresh entry for ``key`` or ``None``."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        models, fetched_at = entry
        if self._clock() - fetched_at > (self.ttl_seconds if max_age is None else max_age):
            return None
        return list(models)

    def put(self, key: str, models: List[str]) -> None:
        self._entries[key] = (list(models), self._clock())

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop ``key``, or every entry when ``key`` is ``None``."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ModelListCache"]
