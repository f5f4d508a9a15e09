"""Message translation into the vendor chat-completions wire schema.

Purpose
-------
Convert host-neutral ``Message`` / ``ContentPart`` / ``ToolSpec`` objects
into the JSON body of ``POST {base}/chat/completions``.

Rules
-----
- Role mapping is total: anything outside ``system``/``user``/``assistant``
  is sent as ``user``.
- A message made of exactly one text part is sent as a bare string. Every
  other shape (several parts, or any image) is sent as a list of typed parts
  so images are never collapsed away.
- Images become ``data:<mime>;base64,<payload>`` URIs. An unrecognized binary
  representation is logged and encoded as an empty payload; one bad image
  must not abort the request.
- ``tools`` and ``tool_choice`` are both present or both absent.
- ``temperature`` is omitted when unset; ``max_tokens`` is always sent.

Notes
-----
Pure functions apart from the warning log; no network access.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ..constants import DEFAULT_WIRE_ROLE, TOOL_CHOICE_AUTO, WIRE_ROLES
from ..logging import get_logger, log_event
from ..models_parts.chat_request import CompletionRequest
from ..models_parts.content_part import ContentPart
from ..models_parts.message import Message
from ..models_parts.tool_spec import ToolSpec

_logger = get_logger("providers.translation")

WireContent = Union[str, List[Dict[str, Any]]]


def translate_role(role: Optional[str]) -> str:
    """Map a host role to a wire role; unknown roles become ``"user"``."""
    normalized = (role or "").strip().lower()
    return normalized if normalized in WIRE_ROLES else DEFAULT_WIRE_ROLE


def _as_bytes(data: Any) -> Optional[bytes]:
    """Return ``data`` as bytes when its representation is recognized."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    buffer = getattr(data, "buffer", None)
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        return bytes(buffer)
    tobytes = getattr(data, "tobytes", None)
    if callable(tobytes):
        raw = tobytes()
        if isinstance(raw, (bytes, bytearray, memoryview)):
            return bytes(raw)
    return None


def encode_image_data(data: Any) -> str:
    """Base64-encode an image payload.

    Accepts ``bytes``/``bytearray``/``memoryview``, objects exposing a
    bytes-like ``buffer`` attribute, and objects with ``tobytes()`` (arrays).
    Anything else yields ``""`` after a warning.
    """
    raw = _as_bytes(data)
    if raw is None:
        log_event(
            _logger,
            "image.unknown_format",
            level=logging.WARNING,
            data_type=type(data).__name__,
        )
        return ""
    return base64.b64encode(raw).decode("ascii")


def _translate_part(part: ContentPart) -> Dict[str, Any]:
    if part.type == "image":
        mime = part.mime_type or "application/octet-stream"
        return {
            "type": "image_url",
            "image_url": {"url": f"data:{mime};base64,{encode_image_data(part.data)}"},
        }
    return {"type": "text", "text": part.text or ""}


def translate_content(parts: Sequence[ContentPart]) -> WireContent:
    """Serialize message parts (bare string for a lone text part)."""
    if len(parts) == 1 and parts[0].is_text:
        return parts[0].text or ""
    return [_translate_part(p) for p in parts]


def translate_message(message: Message) -> Dict[str, Any]:
    return {"role": translate_role(message.role), "content": translate_content(message.content)}


def translate_messages(messages: Iterable[Message]) -> List[Dict[str, Any]]:
    return [translate_message(m) for m in messages]


def translate_tool(spec: ToolSpec) -> Dict[str, Any]:
    """Map a ``ToolSpec`` to a chat.completions ``tools[]`` entry."""
    return {
        "type": "function",
        "function": {
            "name": spec.name,
            "description": spec.description,
            "parameters": spec.parameters,
        },
    }


def translate_tools(tools: Optional[Iterable[ToolSpec]]) -> List[Dict[str, Any]]:
    return [translate_tool(t) for t in tools or ()]


def build_request_body(request: CompletionRequest) -> Dict[str, Any]:
    """Build the JSON body for a streaming chat-completions call."""
    body: Dict[str, Any] = {
        "model": request.model,
        "messages": translate_messages(request.messages),
        "stream": True,
    }
    if request.temperature is not None:
        body["temperature"] = request.temperature
    body["max_tokens"] = request.max_tokens
    tools = translate_tools(request.tools)
    if tools:
        body["tools"] = tools
        body["tool_choice"] = TOOL_CHOICE_AUTO
    return body


__all__ = [
    "WireContent",
    "translate_role",
    "encode_image_data",
    "translate_content",
    "translate_message",
    "translate_messages",
    "translate_tool",
    "translate_tools",
    "build_request_body",
]
