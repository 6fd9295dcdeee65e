"""Incremental splitter separating ``<think>`` reasoning from visible content.

The splitter is provider-agnostic: it runs on the unified delta text stream
after whichever delta parser produced it.

State machine
-------------
``NORMAL`` routes text to content and searches for the open tag; ``IN_THINK``
routes text to reasoning and searches for the close tag. When a chunk ends
with a strict prefix of the tag being searched for, that suffix is held in
``pending`` and prepended to the next chunk, so a tag split across chunk
boundaries is never missed. At most ``len(tag) - 1`` characters are held.

Finalization (once, at stream end) flushes ``pending`` by the current state:
an unterminated think block counts entirely as reasoning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...config.defaults import THINK_CLOSE_TAG, THINK_OPEN_TAG


@dataclass
class ThinkStreamState:
    """Mutable splitter state owned by one streaming turn."""

    in_think: bool = False
    pending: str = ""


@dataclass(frozen=True)
class ThinkSplit:
    """Content and reasoning produced by one splitter step."""

    content: str = ""
    reasoning: str = ""

    def __add__(self, other: "ThinkSplit") -> "ThinkSplit":
        return ThinkSplit(self.content + other.content, self.reasoning + other.reasoning)


def _longest_suffix_prefix(text: str, tag: str) -> int:
    """Length of the longest suffix of ``text`` that is a strict prefix of ``tag``."""
    for size in range(min(len(text), len(tag) - 1), 0, -1):
        if text.endswith(tag[:size]):
            return size
    return 0


def create_think_state() -> ThinkStreamState:
    return ThinkStreamState()


def consume_think_delta(state: ThinkStreamState, chunk: str) -> ThinkSplit:
    """Feed one delta through the splitter, mutating ``state``."""
    text = state.pending + chunk
    state.pending = ""
    content: list[str] = []
    reasoning: list[str] = []

    while text:
        tag = THINK_CLOSE_TAG if state.in_think else THINK_OPEN_TAG
        sink = reasoning if state.in_think else content
        index = text.find(tag)
        if index >= 0:
            sink.append(text[:index])
            text = text[index + len(tag):]
            state.in_think = not state.in_think
            continue
        keep = _longest_suffix_prefix(text, tag)
        if keep:
            sink.append(text[:-keep])
            state.pending = text[-keep:]
        else:
            sink.append(text)
        break

    return ThinkSplit("".join(content), "".join(reasoning))


def finalize_think_stream(state: ThinkStreamState) -> ThinkSplit:
    """Flush ``pending`` to content (``NORMAL``) or reasoning (``IN_THINK``)."""
    leftover, state.pending = state.pending, ""
    if not leftover:
        return ThinkSplit()
    if state.in_think:
        return ThinkSplit(reasoning=leftover)
    return ThinkSplit(content=leftover)


def split_think_tags(text: str) -> ThinkSplit:
    """Split a complete text in one step (feed + finalize)."""
    state = create_think_state()
    return consume_think_delta(state, text) + finalize_think_stream(state)


def normalize_think_tags(content: str, reasoning: Optional[str] = None) -> ThinkSplit:
    """Strip think markup from a stored message, merging with existing reasoning.

    Returns the input unchanged when ``content`` holds no think block.
    """
    parsed = split_think_tags(content)
    if parsed.content == content and not parsed.reasoning:
        return ThinkSplit(content, reasoning or "")
    merged = "\n".join(part for part in (reasoning or "", parsed.reasoning) if part)
    return ThinkSplit(parsed.content, merged)


class ThinkStreamSplitter:
    """Object wrapper owning one :class:`ThinkStreamState` for a turn."""

    def __init__(self) -> None:
        self.state = create_think_state()
        self._finalized = False

    def feed(self, chunk: str) -> ThinkSplit:
        if self._finalized:
            raise RuntimeError("think splitter already finalized")
        return consume_think_delta(self.state, chunk)

    def finalize(self) -> ThinkSplit:
        if self._finalized:
            raise RuntimeError("think splitter already finalized")
        self._finalized = True
        return finalize_think_stream(self.state)


__all__ = [
    "ThinkStreamState",
    "ThinkSplit",
    "ThinkStreamSplitter",
    "create_think_state",
    "consume_think_delta",
    "finalize_think_stream",
    "split_think_tags",
    "normalize_think_tags",
]
