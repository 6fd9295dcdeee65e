"""
Configuration error types.

Raised synchronously before any network attempt when a turn cannot be set up:
no resolvable credential, a custom endpoint without a base URL, an unknown
provider id, or a URL rejected by the security gate. Never retried.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class ConfigurationError(ProviderError):
    """A turn could not be configured; always surfaced to the caller."""

    def __init__(self, message: str, *, provider: str = "-", model: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.CONFIG, message=message, provider=provider, model=model)


class UnknownProviderError(ConfigurationError):
    """Registry lookup miss for a provider id."""

    def __init__(self, provider_id: str) -> None:
        super().__init__("unknown provider", provider=provider_id or "-")
        self.provider_id = provider_id


class SecurityError(ConfigurationError):
    """A URL failed the allow-list check."""

    def __init__(self, url: str) -> None:
        super().__init__("Only HTTPS or localhost URLs are allowed")
        self.url = url


__all__ = ["ConfigurationError", "UnknownProviderError", "SecurityError"]
