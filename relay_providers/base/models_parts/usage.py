"""
Usage: canonical token accounting for one completion.

Every field is independently optional; ``None`` means the provider did not
report it, which is different from zero.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Usage:
    """Token counts reported by a provider.

    Attributes:
        prompt_tokens: Tokens consumed by the input.
        completion_tokens: Tokens generated.
        total_tokens: Total as reported (OpenAI) or derived (Anthropic).
    """

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    def to_dict(self) -> Dict[str, Optional[int]]:
        return asdict(self)


__all__ = ["Usage"]
