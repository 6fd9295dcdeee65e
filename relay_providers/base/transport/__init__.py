"""Transport implementations behind one contract.

``DirectTransport`` calls out from this process; ``DelegatedTransport`` hands
the call to a host bridge and receives incremental chunks over a per-request
event channel. Pick one with :func:`select_transport`.
"""

from .delegated import DelegatedTransport, stream_channel
from .direct import DirectTransport
from .loopback_host import LoopbackHostBridge
from .selection import TRANSPORT_ENV, select_transport

__all__ = [
    "DirectTransport",
    "DelegatedTransport",
    "LoopbackHostBridge",
    "select_transport",
    "stream_channel",
    "TRANSPORT_ENV",
]
