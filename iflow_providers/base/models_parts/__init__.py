"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`iflow_providers.base.models_parts` if needed, while `iflow_providers.base.models`
remains the primary stable import path.
"""

from .content_part import ContentPart, ContentPartType
from .message import Message, Role
from .provider_metadata import ProviderMetadata
from .tool_spec import ToolSpec
from .chat_request import CompletionRequest, ToolChoice
from .chat_response import ChatResponse
from .model_info import ModelInfo

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Message",
    "Role",
    "ProviderMetadata",
    "ToolSpec",
    "CompletionRequest",
    "ToolChoice",
    "ChatResponse",
    "ModelInfo",
]
