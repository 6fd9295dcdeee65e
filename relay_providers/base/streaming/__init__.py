"""Streaming package: SSE frame scanning, think-tag splitting and stream events."""

from .events import ChatStreamEvent, StreamEventKind, TurnOutcome, accumulate_events
from .sse import SSEFrameScanner, looks_like_event_stream
from .think_tags import (
    ThinkSplit,
    ThinkStreamSplitter,
    ThinkStreamState,
    consume_think_delta,
    create_think_state,
    finalize_think_stream,
    normalize_think_tags,
    split_think_tags,
)

__all__ = [
    "ChatStreamEvent",
    "StreamEventKind",
    "TurnOutcome",
    "accumulate_events",
    "SSEFrameScanner",
    "looks_like_event_stream",
    "ThinkSplit",
    "ThinkStreamSplitter",
    "ThinkStreamState",
    "consume_think_delta",
    "create_think_state",
    "finalize_think_stream",
    "normalize_think_tags",
    "split_think_tags",
]
