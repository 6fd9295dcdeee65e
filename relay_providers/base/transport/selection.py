"""Transport selection, done once at startup.

A host bridge selects the delegated transport; without one the direct
transport is used. ``RELAY_TRANSPORT=direct`` forces the direct transport
even when a bridge is available.
"""

from __future__ import annotations

import os
from typing import Optional

from ..interfaces import HostBridge, Transport
from .delegated import DelegatedTransport
from .direct import DirectTransport

TRANSPORT_ENV = "RELAY_TRANSPORT"


def select_transport(bridge: Optional[HostBridge] = None) -> Transport:
    """Return the transport implementation for this process."""
    forced = (os.getenv(TRANSPORT_ENV) or "").strip().lower()
    if bridge is not None and forced != "direct":
        return DelegatedTransport(bridge)
    return DirectTransport()


__all__ = ["select_transport", "TRANSPORT_ENV"]
