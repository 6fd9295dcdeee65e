"""Transport Protocol (single-class module).

Both the direct (in-process) and delegated (host process) transports satisfy
this contract so adapters stay transport-agnostic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Protocol, runtime_checkable

from ..models import HttpRequest, HttpResponse

if TYPE_CHECKING:
    from ..cancellation import CancellationToken

StreamChunkHandler = Callable[[str], None]


@runtime_checkable
class Transport(Protocol):
    """Executes one HTTP call.

    Raises ``TransportError`` for non-2xx statuses and non-HTTP failures and
    ``CancelledError`` when ``cancel_token`` fires. When ``req.stream`` is set
    and ``on_stream_chunk`` is given, body text is delivered to it in order
    before the call settles.
    """

    async def request(
        self,
        req: HttpRequest,
        on_stream_chunk: Optional[StreamChunkHandler] = None,
        cancel_token: Optional["CancellationToken"] = None,
    ) -> HttpResponse:
        ...
