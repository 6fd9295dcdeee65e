"""LoopbackHostBridge: an in-process host for the delegated transport.

Implements the host side of the ``api_request`` / ``abort_request`` commands
with a streaming ``httpx`` request, pushing body text to the request's event
channel as it arrives. Lets the delegated transport deliver real incremental
chunks without a separate host process, and serves as the reference for what
an out-of-process host must do.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from ...config.defaults import HOST_ABORT_COMMAND, HOST_REQUEST_COMMAND
from ..http import get_httpx_client
from ..interfaces import ChannelHandler, Unlisten
from ..logging import get_logger, log_event
from ..models import HttpResponse
from ._encoding import build_httpx_request, payload_to_request
from .delegated import stream_channel


class LoopbackHostBridge:
    """Host bridge running requests on the current event loop."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        self._client = client
        self._listeners: Dict[str, List[ChannelHandler]] = {}
        self._inflight: Dict[str, asyncio.Task] = {}
        self._logger = get_logger("relay.transport.host")

    # ----- channels -----

    async def listen(self, channel: str, handler: ChannelHandler) -> Unlisten:
        self._listeners.setdefault(channel, []).append(handler)

        async def _unlisten() -> None:
            handlers = self._listeners.get(channel)
            if handlers and handler in handlers:
                handlers.remove(handler)
            if not handlers:
                self._listeners.pop(channel, None)

        return _unlisten

    def emit(self, channel: str, chunk: str) -> None:
        """Push ``chunk`` to every handler subscribed to ``channel``."""
        for handler in list(self._listeners.get(channel, ())):
            handler(chunk)

    def listener_count(self, channel: Optional[str] = None) -> int:
        if channel is not None:
            return len(self._listeners.get(channel, ()))
        return sum(len(h) for h in self._listeners.values())

    # ----- commands -----

    async def invoke(self, command: str, payload: Mapping[str, Any]) -> Any:
        if command == HOST_REQUEST_COMMAND:
            return await self._api_request(payload)
        if command == HOST_ABORT_COMMAND:
            return self._abort(str(payload.get("requestId") or ""))
        raise ValueError(f"unknown host command: {command}")

    async def _api_request(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        req = payload_to_request(payload)
        request_id = payload.get("requestId")
        channel = stream_channel(str(request_id)) if request_id else None
        current = asyncio.current_task()
        if request_id and current is not None:
            self._inflight[str(request_id)] = current
        client = self._client if self._client is not None else get_httpx_client(None, purpose="host")
        try:
            response = await client.send(build_httpx_request(client, req), stream=True)
            parts: List[str] = []
            try:
                async for text in response.aiter_text():
                    if not text:
                        continue
                    parts.append(text)
                    if req.stream and channel is not None and response.is_success:
                        self.emit(channel, text)
            finally:
                await response.aclose()
        finally:
            if request_id:
                self._inflight.pop(str(request_id), None)
        body = "".join(parts)
        return {
            "status": response.status_code,
            "ok": response.is_success,
            "headers": dict(response.headers),
            "data": HttpResponse.decode_body(body),
        }

    def _abort(self, request_id: str) -> bool:
        task = self._inflight.pop(request_id, None)
        if task is None or task.done():
            return False
        task.cancel()
        log_event(self._logger, "host.abort", level=logging.INFO, request_id=request_id)
        return True


__all__ = ["LoopbackHostBridge"]
