"""
Message DTO used across providers.

Defines the immutable `Message` dataclass and the `Role` literal. Ordering of
messages within a turn is conversation order and is preserved by every
adapter.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class Message:
    """A single chat message.

    Attributes:
        role: ``"system"``, ``"user"`` or ``"assistant"``.
        content: Plain text content.
    """

    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        """Return the ``{"role", "content"}`` wire shape shared by the vendors."""
        return {"role": self.role, "content": self.content}


__all__ = ["Message", "Role"]
