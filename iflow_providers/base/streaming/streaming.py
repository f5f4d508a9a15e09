"""Accumulation of a normalized event stream into one response.

``accumulate_events`` drains an event iterator and returns a ``ChatResponse``
with the concatenated text and the tool calls reassembled by index. Stream
failures are never silent: when a ``ProviderError`` interrupts the stream,
the partial text is kept and a single ``[error: <code>: <message>]`` line is
appended.
"""

from __future__ import annotations

import time
from typing import Iterable, List, Optional

from ..errors import ProviderError
from ..models import ChatResponse, ProviderMetadata
from .events import NormalizedEvent, StreamDone, TextDelta, ToolCallDelta
from .tool_calls import ToolCall, ToolCallAccumulator


def format_stream_error(error: ProviderError) -> str:
    """Render the error line appended to partial output."""
    return f"[error: {error.code.value}: {error.message}]"


def accumulate_events(
    events: Iterable[NormalizedEvent],
    *,
    provider: str = "unknown",
    model: str = "unknown",
) -> ChatResponse:
    """Drain ``events`` into a ``ChatResponse``.

    Cancellation simply ends the iterable early, which yields whatever was
    received so far with no error line.
    """
    t0 = time.perf_counter()
    text_parts: List[str] = []
    accumulator = ToolCallAccumulator()
    done: Optional[StreamDone] = None
    failure: Optional[ProviderError] = None
    count = 0
    try:
        for event in events:
            count += 1
            if isinstance(event, TextDelta):
                text_parts.append(event.value)
            elif isinstance(event, ToolCallDelta):
                accumulator.add(event)
            elif isinstance(event, StreamDone):
                done = event
    except ProviderError as err:
        failure = err
    calls: List[ToolCall] = accumulator.finish()

    text = "".join(text_parts)
    if failure is not None:
        text = f"{text}\n{format_stream_error(failure)}" if text else format_stream_error(failure)

    meta = ProviderMetadata(
        provider_name=provider,
        model_name=(done.model if done and done.model else model),
        response_id=done.response_id if done else None,
        latency_ms=(time.perf_counter() - t0) * 1000.0,
        usage=done.usage if done else None,
        extra={"stream_events": count},
    )
    if failure is not None:
        meta.extra["stream_error"] = failure.code.value
    return ChatResponse(
        text=text,
        meta=meta,
        tool_calls=calls,
        finish_reason=done.finish_reason if done else None,
    )


__all__ = [
    "accumulate_events",
    "format_stream_error",
]
