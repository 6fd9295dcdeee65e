"""Token usage normalization for the two vendor usage shapes.

OpenAI reports ``total_tokens`` itself; it is passed through verbatim and
never summed, so a missing total stays ``None``. Anthropic never reports a
total; it is always derived as ``(input or 0) + (output or 0)``, so it is
``0`` when both sides are missing. Callers must not assume the two totals
mean the same thing.

Values that are not non-negative integers are coerced to ``None``. Absent
raw usage maps to ``None`` rather than to an all-``None`` ``Usage``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..models import Usage


def _coerce_int(value: Any) -> Optional[int]:
    """Return ``value`` as a non-negative ``int`` or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    elif isinstance(value, str):
        if not value.strip().isdigit():
            return None
        value = int(value)
    if not isinstance(value, int) or value < 0:
        return None
    return value


def _first(raw: Mapping[str, Any], *keys: str) -> Optional[int]:
    for key in keys:
        coerced = _coerce_int(raw.get(key))
        if coerced is not None:
            return coerced
    return None


def map_openai_usage(raw_usage: Any) -> Optional[Usage]:
    """Map an OpenAI-style ``usage`` object.

    ``prompt_tokens`` falls back to ``input_tokens`` and ``completion_tokens``
    falls back to ``output_tokens``.
    """
    if not isinstance(raw_usage, Mapping):
        return None
    return Usage(
        prompt_tokens=_first(raw_usage, "prompt_tokens", "input_tokens"),
        completion_tokens=_first(raw_usage, "completion_tokens", "output_tokens"),
        total_tokens=_coerce_int(raw_usage.get("total_tokens")),
    )


def map_anthropic_usage(raw_usage: Any) -> Optional[Usage]:
    """Map an Anthropic-style ``usage`` object with a derived total."""
    if not isinstance(raw_usage, Mapping):
        return None
    prompt = _coerce_int(raw_usage.get("input_tokens"))
    completion = _coerce_int(raw_usage.get("output_tokens"))
    return Usage(
        prompt_tokens=prompt,
        completion_tokens=completion,
        total_tokens=(prompt or 0) + (completion or 0),
    )


__all__ = ["map_openai_usage", "map_anthropic_usage"]
