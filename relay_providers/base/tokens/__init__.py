"""Token usage helpers package."""

from .extraction import map_anthropic_usage, map_openai_usage

__all__ = ["map_openai_usage", "map_anthropic_usage"]
