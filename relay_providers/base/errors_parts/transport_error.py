"""
Transport error types.

`TransportError` carries the HTTP status of a failed call (``0`` for
non-HTTP failures such as DNS, TLS or cancellation) and a message derived
from the response body, capped at `MAX_ERROR_MESSAGE_CHARS`.
"""
from __future__ import annotations

from typing import Optional

from .classification import code_for_status
from .error_code import ErrorCode
from .provider_error import ProviderError

MAX_ERROR_MESSAGE_CHARS = 4096


class TransportError(ProviderError):
    """Network call failed or returned a non-2xx status."""

    def __init__(
        self,
        message: str,
        status: int = 0,
        *,
        code: Optional[ErrorCode] = None,
        provider: str = "-",
        raw: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            code=code or code_for_status(status),
            message=message[:MAX_ERROR_MESSAGE_CHARS],
            provider=provider,
            raw=raw,
        )
        self.status = status

    @classmethod
    def from_body(cls, status: int, body: str, *, provider: str = "-") -> "TransportError":
        """Build the error for a non-2xx response from its body text."""
        return cls(f"HTTP {status}: {body}", status, provider=provider)


class CancelledError(TransportError):
    """Raised when an operation observes a cancellation request.

    A transport error with status ``0`` so callers that only handle
    `TransportError` still see cancellation as a failed call.
    """

    def __init__(self, reason: str = "operation cancelled") -> None:
        super().__init__(reason, 0, code=ErrorCode.CANCELLED)


__all__ = ["TransportError", "CancelledError", "MAX_ERROR_MESSAGE_CHARS"]
