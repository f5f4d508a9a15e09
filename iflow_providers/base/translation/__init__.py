"""Host message to vendor wire-schema translation."""

from .messages import (
    WireContent,
    build_request_body,
    encode_image_data,
    translate_content,
    translate_message,
    translate_messages,
    translate_role,
    translate_tool,
    translate_tools,
)

__all__ = [
    "WireContent",
    "build_request_body",
    "encode_image_data",
    "translate_content",
    "translate_message",
    "translate_messages",
    "translate_role",
    "translate_tool",
    "translate_tools",
]
