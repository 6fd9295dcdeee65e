"""relay_providers package

One chat contract over incompatible vendor APIs (OpenAI-style, Anthropic,
custom JSON), with streamed deltas, ``<think>`` reasoning separation and
normalized token usage.

Public API (re-exported):
    - Version: ``__version__``
    - Entry points: :class:`ChatRunner` (``send_turn``, ``stream_turn``) and
      :class:`ProviderManager` (``list_models``, ``choose_model``)
    - Inputs: :class:`ProviderCredential`, :class:`Message`,
      :class:`CancellationToken`
    - Exceptions: :class:`ProviderError` and its subclasses, :class:`ErrorCode`

Example::

    runner = ChatRunner()
    result = await runner.send_turn(credential, [Message("user", "hi")])
"""

from .base.cancellation import CancellationToken
from .base.dto import ProviderCredential, SecretRefDTO
from .base.errors import (
    CancelledError,
    ConfigurationError,
    ErrorCode,
    ProviderError,
    SecurityError,
    TransportError,
    UnknownProviderError,
)
from .base.models import ChatResult, Message, SecretRef, Usage
from .base.streaming import ChatStreamEvent, StreamEventKind, TurnOutcome, accumulate_events
from .service import ChatRunner, ModelListCache, ProviderManager, TurnOptions

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ChatRunner",
    "ProviderManager",
    "ModelListCache",
    "TurnOptions",
    "ProviderCredential",
    "SecretRefDTO",
    "Message",
    "SecretRef",
    "ChatResult",
    "Usage",
    "CancellationToken",
    "ChatStreamEvent",
    "StreamEventKind",
    "TurnOutcome",
    "accumulate_events",
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "UnknownProviderError",
    "SecurityError",
    "TransportError",
    "CancelledError",
]
