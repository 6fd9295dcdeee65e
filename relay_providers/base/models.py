"""
Provider-agnostic domain models (DTOs) public surface.

Re-exports the one-class-per-file implementations under
``relay_providers.base.models_parts``.
"""

from .models_parts.message import Message, Role
from .models_parts.secret_ref import SecretRef
from .models_parts.provider_config import ProviderConfig
from .models_parts.chat_params import ChatParams
from .models_parts.usage import Usage
from .models_parts.chat_result import ChatResult
from .models_parts.chat_callbacks import ChatCallbacks
from .models_parts.provider_info import ProviderInfo
from .models_parts.http_request import HttpMethod, HttpRequest
from .models_parts.http_response import HttpResponse

__all__ = [
    "Message",
    "Role",
    "SecretRef",
    "ProviderConfig",
    "ChatParams",
    "Usage",
    "ChatResult",
    "ChatCallbacks",
    "ProviderInfo",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
]
