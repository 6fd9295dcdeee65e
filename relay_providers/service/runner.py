"""Chat runner: one turn from credential to adapter.

``send_turn`` resolves the adapter and config, picks the effective model
(override, credential or configured default, first listed model, ``""``),
and delegates to the adapter's ``chat``. ``stream_turn`` runs the same turn in a
task and yields tagged events through an ``asyncio.Queue``, splitting
``<think>`` reasoning from visible text as deltas arrive.

Cancellation is checked before any work, so an already-cancelled token
issues no network call at all.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Optional, Sequence, Tuple

from ..base.cancellation import CancellationToken
from ..base.dto import ProviderCredential
from ..base.errors import ProviderError
from ..base.interfaces import ChatProvider
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ChatCallbacks, ChatParams, ChatResult, Message, ProviderConfig
from ..base.streaming import (
    ChatStreamEvent,
    StreamEventKind,
    ThinkSplit,
    ThinkStreamSplitter,
    normalize_think_tags,
)
from ..config.defaults import TURN_DEFAULT_MAX_TOKENS, TURN_DEFAULT_TEMPERATURE, TURN_DEFAULT_TOP_P
from .manager import ProviderManager


@dataclass(frozen=True)
class TurnOptions:
    """Sampling parameters applied to every turn; ``None`` omits the field."""

    max_tokens: Optional[int] = TURN_DEFAULT_MAX_TOKENS
    temperature: Optional[float] = TURN_DEFAULT_TEMPERATURE
    top_p: Optional[float] = TURN_DEFAULT_TOP_P


class ChatRunner:
    """Top-level entry point for chat turns.

    Parameters:
        manager: Provider manager supplying adapters, configs and model choice.
        options: Default sampling parameters.
    """

    def __init__(self, manager: Optional[ProviderManager] = None, options: Optional[TurnOptions] = None) -> None:
        self.manager = manager or ProviderManager()
        self.options = options or TurnOptions()
        self._logger = get_logger("relay.service.runner")

    async def send_turn(
        self,
        credential: ProviderCredential,
        messages: Sequence[Message],
        system: Optional[str] = None,
        model: Optional[str] = None,
        cancel_token: Optional[CancellationToken] = None,
        on_delta: Optional[Callable[[str], object]] = None,
        options: Optional[TurnOptions] = None,
    ) -> ChatResult:
        """Run one turn and return the adapter's result.

        Deltas go to ``on_delta``; passing one requests streaming. Errors
        propagate unchanged.
        """
        adapter, config, effective_model = await self._prepare(credential, model, cancel_token)
        return await self._chat(
            adapter, config, credential, messages, system, effective_model, cancel_token, on_delta, options
        )

    async def _prepare(
        self,
        credential: ProviderCredential,
        model: Optional[str],
        cancel_token: Optional[CancellationToken],
    ) -> Tuple[ChatProvider, ProviderConfig, str]:
        adapter = self.manager.adapter_for(credential)
        config = self.manager.ensure_config(credential)
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        effective_model = model or await self.manager.choose_model(credential)
        return adapter, config, effective_model

    async def _chat(
        self,
        adapter: ChatProvider,
        config: ProviderConfig,
        credential: ProviderCredential,
        messages: Sequence[Message],
        system: Optional[str],
        effective_model: str,
        cancel_token: Optional[CancellationToken],
        on_delta: Optional[Callable[[str], object]],
        options: Optional[TurnOptions],
    ) -> ChatResult:
        opts = options or self.options
        params = ChatParams(
            model=effective_model,
            messages=list(messages),
            system=system,
            stream=on_delta is not None,
            max_tokens=opts.max_tokens,
            temperature=opts.temperature,
            top_p=opts.top_p,
            cancel_token=cancel_token,
        )
        log_event(
            self._logger,
            "turn.start",
            LogContext(provider=adapter.info.id, model=effective_model or None, credential_id=credential.id),
            stream=params.stream,
            messages=len(params.messages),
        )
        return await adapter.chat(config, params, ChatCallbacks(on_delta=on_delta))

    async def stream_turn(
        self,
        credential: ProviderCredential,
        messages: Sequence[Message],
        system: Optional[str] = None,
        model: Optional[str] = None,
        cancel_token: Optional[CancellationToken] = None,
        options: Optional[TurnOptions] = None,
    ) -> AsyncIterator[ChatStreamEvent]:
        """Yield ``TEXT`` / ``REASONING`` events, then one ``DONE`` or ``ERROR``.

        Provider errors become an ``ERROR`` event; anything else propagates.
        Closing the iterator early cancels the turn.
        """
        token = cancel_token.child() if cancel_token is not None else CancellationToken()
        queue: "asyncio.Queue[Optional[ChatStreamEvent]]" = asyncio.Queue()
        splitter = ThinkStreamSplitter()
        provider_id = credential.provider_id
        resolved = {"model": model or ""}

        def _event(kind: StreamEventKind, **fields) -> ChatStreamEvent:
            return ChatStreamEvent(kind=kind, provider=provider_id, model=resolved["model"], **fields)

        def _publish(split: ThinkSplit) -> None:
            if split.reasoning:
                queue.put_nowait(_event(StreamEventKind.REASONING, text=split.reasoning))
            if split.content:
                queue.put_nowait(_event(StreamEventKind.TEXT, text=split.content))

        def _on_delta(chunk: str) -> None:
            if not token.cancelled:
                _publish(splitter.feed(chunk))

        async def _run() -> None:
            try:
                adapter, config, resolved["model"] = await self._prepare(credential, model, token)
                result = await self._chat(
                    adapter, config, credential, messages, system, resolved["model"], token, _on_delta, options
                )
                _publish(splitter.finalize())
                cleaned = normalize_think_tags(result.text)
                queue.put_nowait(
                    _event(
                        StreamEventKind.DONE,
                        result=ChatResult(text=cleaned.content, usage=result.usage, raw=result.raw),
                        reasoning=cleaned.reasoning,
                    )
                )
            except ProviderError as exc:
                log_event(
                    self._logger,
                    "turn.error",
                    LogContext(provider=provider_id, credential_id=credential.id),
                    level=logging.WARNING,
                    error_code=exc.code.value,
                )
                queue.put_nowait(_event(StreamEventKind.ERROR, error=exc.message, error_code=exc.code.value))
            finally:
                queue.put_nowait(None)

        task = asyncio.create_task(_run())
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
            await task
        finally:
            if not task.done():
                token.cancel("stream closed")
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)
            token.detach()


__all__ = ["ChatRunner", "TurnOptions"]
