"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `relay_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .configuration_error import ConfigurationError, SecurityError, UnknownProviderError
from .transport_error import CancelledError, MAX_ERROR_MESSAGE_CHARS, TransportError
from .classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "SecurityError",
    "UnknownProviderError",
    "TransportError",
    "CancelledError",
    "MAX_ERROR_MESSAGE_CHARS",
    "classify_exception",
    "code_for_status",
]
