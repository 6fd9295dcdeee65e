"""Custom JSON provider adapter package."""

from .client import CustomJsonProvider

__all__ = ["CustomJsonProvider"]
