"""Base shared constants for the streaming chat protocol.

Central location for the wire-level literals of the OpenAI-style
``text/event-stream`` protocol and a few sentinel strings.

Security
--------
Only generic sentinel strings live here; no credentials.

# pragma: allowlist secret
"""
from __future__ import annotations

# SSE framing
SSE_FRAME_DELIMITER = "\n\n"
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

# Chat completions endpoint path (appended to the provider base URL)
CHAT_COMPLETIONS_PATH = "/chat/completions"

# Wire roles accepted by the vendor; anything else is sent as "user"
WIRE_ROLES = ("system", "user", "assistant")
DEFAULT_WIRE_ROLE = "user"

# Tool choice policy sent whenever tools are present
TOOL_CHOICE_AUTO = "auto"

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

# Push-source notification names
PUSH_EVENT_DATA = "data"
PUSH_EVENT_END = "end"
PUSH_EVENT_ERROR = "error"

# Error bodies of non-200 responses are captured up to this many bytes
MAX_ERROR_BODY_BYTES = 64 * 1024

__all__ = [
    "SSE_FRAME_DELIMITER",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "CHAT_COMPLETIONS_PATH",
    "WIRE_ROLES",
    "DEFAULT_WIRE_ROLE",
    "TOOL_CHOICE_AUTO",
    "MISSING_API_KEY_ERROR",
    "PUSH_EVENT_DATA",
    "PUSH_EVENT_END",
    "PUSH_EVENT_ERROR",
    "MAX_ERROR_BODY_BYTES",
]
