"""Incremental scanner for ``text/event-stream`` bodies.

Only ``data: `` frames are interpreted. Input may arrive in arbitrary chunks
(lines split anywhere); complete lines are processed as soon as their newline
arrives and the trailing partial line is processed by :meth:`SSEFrameScanner.close`.
The literal ``[DONE]`` payload ends the stream; anything after it is ignored.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterator, List, Optional

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class SSEFrameScanner:
    """Feed chunks, get decoded JSON frames.

    Parameters:
        on_malformed: Called with the raw payload of a frame that is not valid
            JSON. The frame is skipped either way.
    """

    def __init__(self, on_malformed: Optional[Callable[[str], None]] = None) -> None:
        self._buffer = ""
        self._on_malformed = on_malformed
        self.done = False
        self.frames_seen = 0

    def feed(self, chunk: str) -> List[Any]:
        """Consume ``chunk`` and return the frames completed by it."""
        if self.done:
            return []
        self._buffer += chunk
        *lines, self._buffer = self._buffer.split("\n")
        return list(self._scan(lines))

    def close(self) -> List[Any]:
        """Process any trailing line without a newline."""
        if self.done or not self._buffer:
            return []
        rest, self._buffer = self._buffer, ""
        return list(self._scan([rest]))

    def _scan(self, lines: List[str]) -> Iterator[Any]:
        for line in lines:
            if self.done:
                return
            line = line.rstrip("\r")
            if not line.startswith(DATA_PREFIX):
                continue
            self.frames_seen += 1
            data = line[len(DATA_PREFIX):].strip()
            if data == DONE_SENTINEL:
                self.done = True
                return
            try:
                yield json.loads(data)
            except ValueError:
                if self._on_malformed is not None:
                    self._on_malformed(data)


def looks_like_event_stream(text: str) -> bool:
    """True when ``text`` contains at least one ``data: `` line."""
    return any(line.startswith(DATA_PREFIX) for line in text.splitlines())


__all__ = ["SSEFrameScanner", "looks_like_event_stream", "DATA_PREFIX", "DONE_SENTINEL"]
