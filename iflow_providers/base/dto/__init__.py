"""DTO validation package for providers."""

from .chat_options import ChatOptions
from .stream_chunk import (
    ChatCompletionChunk,
    ChoiceDelta,
    ChunkChoice,
    FunctionDelta,
    ToolCallChunk,
)

__all__ = [
    "ChatOptions",
    "ChatCompletionChunk",
    "ChoiceDelta",
    "ChunkChoice",
    "FunctionDelta",
    "ToolCallChunk",
]
