"""DirectTransport: issue the HTTP call from the calling process.

Reads the full body before returning. When streaming is requested the whole
body is handed to ``on_stream_chunk`` exactly once: this path has no
incremental delivery, so a "stream" is a single chunk.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..cancellation import CancellationToken
from ..errors import ProviderError, TransportError, classify_exception
from ..http import get_httpx_client
from ..interfaces import StreamChunkHandler
from ..logging import get_logger, header_names, log_event
from ..models import HttpRequest, HttpResponse
from ._cancel import run_cancellable
from ._encoding import build_httpx_request


class DirectTransport:
    """In-process transport over ``httpx.AsyncClient``.

    Parameters:
        client: Optional client to use instead of the shared pool (tests pass
            one backed by ``httpx.MockTransport``).
    """

    name = "direct"

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        self._client = client
        self._logger = get_logger("relay.transport.direct")

    def _get_client(self) -> httpx.AsyncClient:
        return self._client if self._client is not None else get_httpx_client(None, purpose="direct")

    async def request(
        self,
        req: HttpRequest,
        on_stream_chunk: Optional[StreamChunkHandler] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> HttpResponse:
        """Execute ``req``; see :class:`~relay_providers.base.interfaces.Transport`."""
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        log_event(
            self._logger,
            "transport.request",
            level=logging.DEBUG,
            transport=self.name,
            method=req.method,
            url=req.url,
            headers=header_names(req.headers),
            stream=req.stream,
        )
        client = self._get_client()
        try:
            response = await run_cancellable(self._send(client, req), cancel_token)
        except ProviderError as exc:
            self._log_error(req, exc)
            raise
        except httpx.HTTPError as exc:
            err = TransportError(f"Request failed: {exc}", 0, code=classify_exception(exc), raw=exc)
            self._log_error(req, err)
            raise err from exc

        status = response.status_code
        text = response.text
        if not response.is_success:
            err = TransportError.from_body(status, text)
            self._log_error(req, err)
            raise err

        if req.stream and on_stream_chunk is not None:
            on_stream_chunk(text)
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()

        return HttpResponse(
            status=status,
            ok=True,
            headers=dict(response.headers),
            data=HttpResponse.decode_body(text),
        )

    @staticmethod
    async def _send(client: httpx.AsyncClient, req: HttpRequest) -> httpx.Response:
        response = await client.send(build_httpx_request(client, req))
        await response.aread()
        return response

    def _log_error(self, req: HttpRequest, err: ProviderError) -> None:
        log_event(
            self._logger,
            "transport.error",
            level=logging.WARNING,
            transport=self.name,
            method=req.method,
            url=req.url,
            status=getattr(err, "status", None),
            error_code=err.code.value,
        )


__all__ = ["DirectTransport"]
