"""iFlow helpers module.

Purpose:
- Side-effect-free building blocks for ``IFlowProvider``: model id
  resolution, completion request assembly, log context creation and the
  advertised model metadata. Keeps ``client.py`` focused on orchestration.

Failure semantics:
- Option validation errors surface as ``pydantic.ValidationError`` from
  ``ChatOptions``; nothing here performs I/O.
"""

from __future__ import annotations

import uuid
from typing import Any, Mapping, Optional, Sequence

from ..base.dto import ChatOptions
from ..base.logging import LogContext
from ..base.models import CompletionRequest, Message, ModelInfo
from ..config.defaults import (
    IFLOW_DEFAULT_MODEL,
    IFLOW_MAX_INPUT_TOKENS,
    IFLOW_MODEL_FAMILY,
    IFLOW_PROVIDER_NAME,
    IFLOW_VENDOR,
)

MODEL_VERSION = "1.0"


def host_model_id(model: str) -> str:
    """Identifier advertised to hosts, e.g. ``iFlow/qwen3-max``."""
    return f"{IFLOW_VENDOR}/{model}"


def resolve_wire_model(model_id: Optional[str], options: ChatOptions, default: str) -> str:
    """Pick the model name sent on the wire.

    Precedence: explicit ``options.model``, then the host model id with the
    vendor prefix removed, then the configured default.
    """
    if options.model:
        return options.model
    if model_id and model_id.strip():
        vendor_prefix = f"{IFLOW_VENDOR}/"
        candidate = model_id.strip()
        return candidate[len(vendor_prefix):] if candidate.startswith(vendor_prefix) else candidate
    return default or IFLOW_DEFAULT_MODEL


def build_completion_request(
    *,
    model: str,
    messages: Sequence[Message],
    options: ChatOptions,
    default_max_tokens: int,
) -> CompletionRequest:
    """Assemble the fully resolved request for one call.

    ``max_tokens`` falls back to the configured ceiling when the caller does
    not override it.
    """
    return CompletionRequest(
        model=model,
        messages=list(messages),
        max_tokens=options.max_tokens or default_max_tokens,
        temperature=options.temperature,
        tools=list(options.tools),
    )


def coerce_options(options: "ChatOptions | Mapping[str, Any] | None") -> ChatOptions:
    return ChatOptions.coerce(options)


def new_log_context(model: str, caller: Optional[str]) -> LogContext:
    return LogContext(
        provider=IFLOW_PROVIDER_NAME,
        model=model,
        caller=caller,
        request_id=uuid.uuid4().hex,
    )


def build_model_info(model: str, max_output_tokens: int) -> ModelInfo:
    """Metadata for the single model this provider advertises."""
    return ModelInfo(
        id=host_model_id(model),
        name=model,
        provider=IFLOW_PROVIDER_NAME,
        vendor=IFLOW_VENDOR,
        family=IFLOW_MODEL_FAMILY,
        version=MODEL_VERSION,
        max_input_tokens=IFLOW_MAX_INPUT_TOKENS,
        max_output_tokens=max_output_tokens,
        capabilities={"vision": True, "tool_calling": True, "agent_mode": True},
    )


__all__ = [
    "MODEL_VERSION",
    "host_model_id",
    "resolve_wire_model",
    "build_completion_request",
    "coerce_options",
    "new_log_context",
    "build_model_info",
]
