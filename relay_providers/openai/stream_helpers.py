"""Incremental delta extraction for OpenAI-compatible event streams."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..base.cancellation import CancellationToken
from ..base.logging import LogContext, log_event
from ..base.models import Usage
from ..base.streaming import SSEFrameScanner
from ..base.tokens import map_openai_usage
from .helpers import extract_delta_text


class OpenAIStreamAccumulator:
    """Turns transport chunks into text deltas.

    Each chunk is scanned as soon as it arrives; ``choices[0].delta.content``
    of every complete frame is accumulated and handed to ``on_delta``. A
    ``usage`` object on any frame replaces the running usage. Nothing is
    emitted once ``cancel_token`` has fired.
    """

    def __init__(
        self,
        on_delta: Callable[[str], None],
        *,
        cancel_token: Optional[CancellationToken] = None,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._on_delta = on_delta
        self._cancel_token = cancel_token
        self._logger = logger
        self._ctx = ctx
        self._parts: List[str] = []
        self.usage: Optional[Usage] = None
        self.skipped = 0
        self._scanner = SSEFrameScanner(on_malformed=self._skip)

    @property
    def text(self) -> str:
        return "".join(self._parts)

    @property
    def saw_frames(self) -> bool:
        """True once at least one ``data: `` frame (including ``[DONE]``) was seen."""
        return self._scanner.frames_seen > 0

    def feed(self, chunk: str) -> None:
        self._handle(self._scanner.feed(chunk))

    def close(self) -> None:
        self._handle(self._scanner.close())

    def _handle(self, frames: list) -> None:
        for frame in frames:
            if not isinstance(frame, dict):
                continue
            usage = map_openai_usage(frame.get("usage"))
            if usage is not None:
                self.usage = usage
            delta = extract_delta_text(frame)
            if delta is None:
                continue
            if self._cancel_token is not None and self._cancel_token.cancelled:
                return
            self._parts.append(delta)
            self._on_delta(delta)

    def _skip(self, data: str) -> None:
        self.skipped += 1
        if self._logger is not None:
            log_event(
                self._logger,
                "stream.frame_skipped",
                self._ctx,
                level=logging.DEBUG,
                size=len(data),
            )


__all__ = ["OpenAIStreamAccumulator"]
