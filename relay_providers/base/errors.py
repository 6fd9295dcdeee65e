"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``relay_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.configuration_error import ConfigurationError, SecurityError, UnknownProviderError
from .errors_parts.transport_error import CancelledError, MAX_ERROR_MESSAGE_CHARS, TransportError
from .errors_parts.classification import classify_exception, code_for_status

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
