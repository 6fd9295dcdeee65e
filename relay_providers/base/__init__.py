"""
Relay Base Package

Provider-agnostic contracts and building blocks shared by every adapter:

- Models: per-turn DTOs (messages, params, config, usage, results)
- Interfaces: adapter, transport, secret store and host bridge protocols
- Security: URL allow-list and header sanitization
- Transport: direct (httpx) and host-delegated implementations
- Streaming: SSE frame scanning, think-tag splitting, stream events
- Registry: lazy creation of adapters by provider id
"""

from .cancellation import CancellationToken, CancelledError
from .dto import ProviderCredential, SecretRefDTO
from .errors import (
    ConfigurationError,
    ErrorCode,
    ProviderError,
    SecurityError,
    TransportError,
    UnknownProviderError,
    classify_exception,
)
from .factory import ProviderEntry, ProviderRegistry
from .interfaces import ChatProvider, HostBridge, SecretStore, Transport
from .models import (
    ChatCallbacks,
    ChatParams,
    ChatResult,
    HttpRequest,
    HttpResponse,
    Message,
    ProviderConfig,
    ProviderInfo,
    Role,
    SecretRef,
    Usage,
)
from .secrets import ChainedSecretStore, EnvSecretStore, InMemorySecretStore, resolve_secret
from .security import assert_url_allowed, sanitize_headers
from .streaming import (
    ChatStreamEvent,
    StreamEventKind,
    ThinkSplit,
    ThinkStreamSplitter,
    ThinkStreamState,
    TurnOutcome,
    accumulate_events,
    consume_think_delta,
    finalize_think_stream,
    normalize_think_tags,
    split_think_tags,
)
from .timeouts import TimeoutConfig, get_timeout_config
from .tokens import map_anthropic_usage, map_openai_usage
from .transport import DelegatedTransport, DirectTransport, LoopbackHostBridge, select_transport

__all__ = [
    # Models
    "Role",
    "Message",
    "SecretRef",
    "ProviderConfig",
    "ChatParams",
    "Usage",
    "ChatResult",
    "ChatCallbacks",
    "ProviderInfo",
    "HttpRequest",
    "HttpResponse",
    "ProviderCredential",
    "SecretRefDTO",
    # Interfaces
    "ChatProvider",
    "Transport",
    "SecretStore",
    "HostBridge",
    # Errors
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "UnknownProviderError",
    "SecurityError",
    "TransportError",
    "CancelledError",
    "classify_exception",
    # Cancellation
    "CancellationToken",
    # Security and secrets
    "assert_url_allowed",
    "sanitize_headers",
    "resolve_secret",
    "InMemorySecretStore",
    "EnvSecretStore",
    "ChainedSecretStore",
    # Transport
    "DirectTransport",
    "DelegatedTransport",
    "LoopbackHostBridge",
    "select_transport",
    # Streaming
    "ThinkStreamState",
    "ThinkSplit",
    "ThinkStreamSplitter",
    "consume_think_delta",
    "finalize_think_stream",
    "split_think_tags",
    "normalize_think_tags",
    "ChatStreamEvent",
    "StreamEventKind",
    "TurnOutcome",
    "accumulate_events",
    # Usage
    "map_openai_usage",
    "map_anthropic_usage",
    # Registry and config
    "ProviderRegistry",
    "ProviderEntry",
    "TimeoutConfig",
    "get_timeout_config",
]
