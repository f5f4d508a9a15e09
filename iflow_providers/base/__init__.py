"""
Providers Base Package

Provider-agnostic building blocks of the streaming chat pipeline:

- Models (DTOs): messages, content parts, requests, responses, model info
- Translation: host messages to the chat-completions wire schema
- HTTP: pooled clients and the streaming transport
- Streaming: SSE frame decoding, chunk interpretation, stream adaptation
- Errors, cancellation, logging and timeouts shared by every layer
- Repositories: API key resolution through an injected secret store
- Factory: lazy creation of provider adapters by canonical name
"""

from .factory import ProviderFactory, UnknownProviderError, create_provider
from .interfaces import (
    HasDefaultModel,
    LLMProvider,
    ModelListingProvider,
    TokenEstimator,
)
from .models import (
    ChatResponse,
    CompletionRequest,
    ContentPart,
    ContentPartType,
    Message,
    ModelInfo,
    ProviderMetadata,
    Role,
    ToolSpec,
)
from .errors import (
    ConfigurationError,
    DecodeError,
    ErrorCode,
    ProviderError,
    TransportError,
)
from .repositories.keys import (
    EnvSecretStore,
    InMemorySecretStore,
    KeyResolution,
    KeysRepository,
    SecretStore,
)
from .timeouts import TimeoutConfig, get_timeout_config
from .cancellation import CancellationToken, CancelledError
from .streaming import (
    ChatResponseStream,
    NormalizedEvent,
    StreamAdapter,
    StreamController,
    StreamDone,
    StreamMetrics,
    TextDelta,
    ToolCall,
    ToolCallDelta,
    accumulate_events,
    finalize_stream,
)

__all__ = [
    # Models
    "Role",
    "ContentPartType",
    "ContentPart",
    "Message",
    "ToolSpec",
    "ProviderMetadata",
    "CompletionRequest",
    "ChatResponse",
    "ModelInfo",
    # Interfaces
    "LLMProvider",
    "ModelListingProvider",
    "HasDefaultModel",
    "TokenEstimator",
    # Errors
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
    # Repositories
    "SecretStore",
    "InMemorySecretStore",
    "EnvSecretStore",
    "KeysRepository",
    "KeyResolution",
    # Factory
    "ProviderFactory",
    "UnknownProviderError",
    "create_provider",
    # Timeouts & Cancellation
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    # Streaming
    "NormalizedEvent",
    "TextDelta",
    "ToolCallDelta",
    "StreamDone",
    "ToolCall",
    "StreamAdapter",
    "StreamController",
    "ChatResponseStream",
    "StreamMetrics",
    "finalize_stream",
    "accumulate_events",
]
