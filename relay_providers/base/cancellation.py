"""Cooperative cancellation primitives (public API facade).

Notes
-----
- ``CancellationToken`` enables cooperative cancellation signalling across a
  chat turn: checked before the network call is issued and forwarded into the
  call itself.
- ``CancelledError`` is raised by operations that observe a cancellation
  request. It is a ``TransportError`` with status ``0``.
"""

from .errors import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
