"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``iflow_providers.base.models_parts`` so callers have one stable import path.
"""

from .models_parts.content_part import ContentPart, ContentPartType
from .models_parts.message import Message, Role
from .models_parts.provider_metadata import ProviderMetadata
from .models_parts.tool_spec import ToolSpec
from .models_parts.chat_request import CompletionRequest, ToolChoice
from .models_parts.chat_response import ChatResponse
from .models_parts.model_info import ModelInfo

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
