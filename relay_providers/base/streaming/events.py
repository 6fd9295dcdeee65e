"""Tagged stream events emitted by :meth:`ChatRunner.stream_turn`.

Events are produced in provider order. A stream ends with exactly one
``DONE`` or ``ERROR`` event.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from ..models import ChatResult


class StreamEventKind(str, Enum):
    TEXT = "text"
    REASONING = "reasoning"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True)
class ChatStreamEvent:
    """One incremental event of a streaming turn.

    Fields:
      kind: event tag
      provider: provider id the turn ran against
      model: model id used for the turn
      text: visible content delta (``TEXT``) or reasoning delta (``REASONING``)
      result: final result on ``DONE``; text has think markup removed
      reasoning: full reasoning on ``DONE``
      error: error message on ``ERROR``
      error_code: classified error code on ``ERROR``
    """

    kind: StreamEventKind
    provider: str
    model: str
    text: str = ""
    result: Optional[ChatResult] = None
    reasoning: str = ""
    error: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def terminal(self) -> bool:
        return self.kind in (StreamEventKind.DONE, StreamEventKind.ERROR)


@dataclass(frozen=True)
class TurnOutcome:
    """Aggregate view of a finished event stream."""

    provider: str
    model: str
    text: str
    reasoning: str
    result: Optional[ChatResult] = None
    error: Optional[str] = None
    events: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


def accumulate_events(events: Iterable[ChatStreamEvent]) -> TurnOutcome:
    """Rebuild a :class:`TurnOutcome` from a sequence of events.

    Text and reasoning deltas are concatenated; the first ``ERROR`` event wins
    over any ``DONE``.
    """
    events_list: List[ChatStreamEvent] = list(events)
    if not events_list:
        return TurnOutcome(provider="unknown", model="unknown", text="", reasoning="")

    provider = events_list[0].provider
    model = events_list[0].model
    text = "".join(e.text for e in events_list if e.kind is StreamEventKind.TEXT)
    reasoning = "".join(e.text for e in events_list if e.kind is StreamEventKind.REASONING)
    if error_event := next((e for e in events_list if e.kind is StreamEventKind.ERROR), None):
        return TurnOutcome(
            provider=provider,
            model=model,
            text=text,
            reasoning=reasoning,
            error=error_event.error or "stream error",
            events=len(events_list),
        )
    done = next((e for e in events_list if e.kind is StreamEventKind.DONE), None)
    return TurnOutcome(
        provider=provider,
        model=model,
        text=text,
        reasoning=reasoning,
        result=done.result if done else None,
        events=len(events_list),
    )


__all__ = ["StreamEventKind", "ChatStreamEvent", "TurnOutcome", "accumulate_events"]
