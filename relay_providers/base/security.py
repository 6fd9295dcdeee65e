"""URL and header allow-listing shared by every adapter.

``assert_url_allowed`` runs before any transport call; it is not configurable
per provider. ``sanitize_headers`` keeps only the header names an adapter
declares, so arbitrary caller-supplied headers never leave the process.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable, Mapping, Optional

from .errors import SecurityError

_HTTPS_RE = re.compile(r"^https://", re.IGNORECASE)
_LOOPBACK_RE = re.compile(r"^http://(localhost|127\.0\.0\.1)(:\d+)?/", re.IGNORECASE)


def is_url_allowed(url: str) -> bool:
    """Return True for ``https://`` URLs or ``http://`` loopback URLs with a path."""
    return bool(_HTTPS_RE.match(url) or _LOOPBACK_RE.match(url))


def assert_url_allowed(url: str) -> None:
    """Raise :class:`SecurityError` unless ``url`` is HTTPS or plain-HTTP loopback."""
    if not is_url_allowed(url or ""):
        raise SecurityError(url)


def sanitize_headers(candidate: Mapping[str, Optional[str]], allowlist: Iterable[str]) -> Dict[str, str]:
    """Return the allow-listed headers present in ``candidate`` with string values."""
    out: Dict[str, str] = {}
    for key in allowlist:
        value = candidate.get(key)
        if isinstance(value, str):
            out[key] = value
    return out


__all__ = ["assert_url_allowed", "is_url_allowed", "sanitize_headers"]
