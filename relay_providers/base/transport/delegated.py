"""DelegatedTransport: hand the call to a privileged host process.

Streaming protocol:
    1. Subscribe to ``api://<request_id>`` on the host bridge.
    2. Invoke the host ``api_request`` command with the serialized request.
    3. The host pushes raw body text to the channel as it arrives; each chunk
       is forwarded to ``on_stream_chunk`` in order.
    4. The subscription is released on every exit path (success, error,
       cancellation).

Cancellation is checked before dispatch and raced against the host call.
Once the call is delegated the remote request may already be in flight, so
an ``abort_request`` command is sent best-effort and cancellation of the
remote side is not guaranteed.
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Mapping, Optional
from uuid import uuid4

from ...config.defaults import HOST_ABORT_COMMAND, HOST_REQUEST_COMMAND, STREAM_CHANNEL_PREFIX
from ..cancellation import CancellationToken
from ..errors import CancelledError, ProviderError, TransportError, classify_exception
from ..interfaces import ChannelHandler, HostBridge, StreamChunkHandler
from ..logging import get_logger, header_names, log_event
from ..models import HttpRequest, HttpResponse
from ._cancel import run_cancellable
from ._encoding import request_to_payload


def stream_channel(request_id: str) -> str:
    """Return the event channel name for ``request_id``."""
    return f"{STREAM_CHANNEL_PREFIX}{request_id}"


class DelegatedTransport:
    """Transport that runs calls inside a :class:`HostBridge`.

    Parameters:
        bridge: Host command/channel bridge.
        id_factory: Produces per-request ids (channel names derive from them).
    """

    name = "delegated"

    def __init__(self, bridge: HostBridge, *, id_factory: Callable[[], str] = lambda: uuid4().hex) -> None:
        self._bridge = bridge
        self._id_factory = id_factory
        self._logger = get_logger("relay.transport.delegated")

    async def request(
        self,
        req: HttpRequest,
        on_stream_chunk: Optional[StreamChunkHandler] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> HttpResponse:
        """Execute ``req`` through the host; see :class:`~relay_providers.base.interfaces.Transport`."""
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        request_id = self._id_factory()
        streaming = req.stream and on_stream_chunk is not None
        log_event(
            self._logger,
            "transport.request",
            level=logging.DEBUG,
            transport=self.name,
            request_id=request_id,
            method=req.method,
            url=req.url,
            headers=header_names(req.headers),
            stream=req.stream,
        )

        def _forward(chunk: str) -> None:
            if cancel_token is not None and cancel_token.cancelled:
                return
            on_stream_chunk(chunk)  # type: ignore[misc]

        payload = request_to_payload(req, request_id if streaming else None)
        try:
            async with self._subscription(stream_channel(request_id), _forward if streaming else None):
                try:
                    result = await run_cancellable(self._bridge.invoke(HOST_REQUEST_COMMAND, payload), cancel_token)
                except CancelledError:
                    await self._abort(request_id)
                    raise
        except ProviderError as exc:
            self._log_error(req, request_id, exc)
            raise
        except Exception as exc:  # noqa: BLE001 - host failures become status-0 transport errors
            err = TransportError(f"Request failed: {exc}", 0, code=classify_exception(exc), raw=exc)
            self._log_error(req, request_id, err)
            raise err from exc

        response = self._to_response(result)
        if not response.ok:
            body = response.data if isinstance(response.data, str) else _dump(response.data)
            err = TransportError.from_body(response.status, body)
            self._log_error(req, request_id, err)
            raise err
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        return response

    @asynccontextmanager
    async def _subscription(self, channel: str, handler: Optional[ChannelHandler]) -> AsyncIterator[None]:
        """Scoped channel subscription; a no-op when nothing is streamed."""
        if handler is None:
            yield
            return
        unlisten = await self._bridge.listen(channel, handler)
        try:
            yield
        finally:
            await unlisten()

    async def _abort(self, request_id: str) -> None:
        try:
            await self._bridge.invoke(HOST_ABORT_COMMAND, {"requestId": request_id})
        except Exception as exc:  # noqa: BLE001 - abort is best-effort
            log_event(
                self._logger,
                "transport.abort_failed",
                level=logging.WARNING,
                request_id=request_id,
                error=str(exc),
            )

    @staticmethod
    def _to_response(result: Any) -> HttpResponse:
        if not isinstance(result, Mapping):
            raise TransportError("Request failed: malformed host response", 0)
        status = int(result.get("status") or 0)
        ok = bool(result.get("ok", 200 <= status < 300))
        data = result.get("data")
        if isinstance(data, str):
            data = HttpResponse.decode_body(data)
        headers = {str(k): str(v) for k, v in (result.get("headers") or {}).items()}
        return HttpResponse(status=status, ok=ok, headers=headers, data=data)

    def _log_error(self, req: HttpRequest, request_id: str, err: ProviderError) -> None:
        log_event(
            self._logger,
            "transport.error",
            level=logging.WARNING,
            transport=self.name,
            request_id=request_id,
            method=req.method,
            url=req.url,
            status=getattr(err, "status", None),
            error_code=err.code.value,
        )


def _dump(data: Any) -> str:
    try:
        return json.dumps(data, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(data)


__all__ = ["DelegatedTransport", "stream_channel"]
