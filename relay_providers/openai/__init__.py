"""OpenAI-compatible provider adapter package."""

from .client import OpenAICompatibleProvider

__all__ = ["OpenAICompatibleProvider"]
