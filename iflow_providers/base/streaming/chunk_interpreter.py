"""Chunk interpreter: one SSE payload in, zero or more normalized events out.

Purpose
-------
Parse each ``data:`` payload as a chat-completion chunk and map it onto
``TextDelta`` / ``ToolCallDelta`` events, while remembering the bits of
stream-level information (finish reason, model, response id, usage) that the
terminal ``StreamDone`` reports.

Failure Modes
-------------
A payload that is not JSON, not an object, or does not match the chunk
schema is a ``DecodeError``: it is logged as ``stream.decode_error``,
recorded on ``errors`` and skipped. The interpreter never raises for bad
input, so one malformed frame cannot end the stream.

Ordering
--------
Choices are processed in order; within a choice the text delta comes before
its tool-call deltas, which keep their order inside ``tool_calls``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..dto.stream_chunk import ChatCompletionChunk, ChunkChoice
from ..errors import DecodeError
from ..logging import LogContext, get_logger, log_event
from ..tokens.usage import normalize_usage
from .events import NormalizedEvent, StreamDone, TextDelta, ToolCallDelta
from .sse_decoder import extract_payload
from .tool_calls import decode_arguments

_PREVIEW_CHARS = 120


class ChunkInterpreter:
    """Stateful interpreter for one response stream."""

    def __init__(
        self,
        *,
        provider: str = "unknown",
        model: Optional[str] = None,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.provider = provider
        self.requested_model = model
        self.ctx = ctx
        self._logger = logger or get_logger("providers.stream")
        self.errors: List[DecodeError] = []
        self.finish_reason: Optional[str] = None
        self.model: Optional[str] = None
        self.response_id: Optional[str] = None
        self.usage: Optional[Dict[str, Any]] = None

    # ------------------------------------------------------------------ parse
    def _parse(self, payload: str) -> Optional[ChatCompletionChunk]:
        try:
            data = json.loads(payload)
            if not isinstance(data, dict):
                raise ValueError(f"expected JSON object, got {type(data).__name__}")
            return ChatCompletionChunk.model_validate(data)
        except (ValueError, ValidationError) as exc:
            # json.JSONDecodeError is a ValueError subclass
            self._record_error(payload, exc)
            return None

    def _record_error(self, payload: str, exc: Exception) -> None:
        error = DecodeError(
            message=str(exc).splitlines()[0] if str(exc) else exc.__class__.__name__,
            provider=self.provider,
            model=self.requested_model,
            raw=exc,
            payload_preview=payload[:_PREVIEW_CHARS],
        )
        self.errors.append(error)
        log_event(
            self._logger,
            "stream.decode_error",
            self.ctx,
            level=logging.WARNING,
            error_code=error.code.value,
            error=error.message,
            payload_len=len(payload),
            decode_errors=len(self.errors),
        )

    # -------------------------------------------------------------- interpret
    def interpret(self, payload: str) -> List[NormalizedEvent]:
        """Return the events carried by one payload (empty on decode error)."""
        chunk = self._parse(payload)
        if chunk is None:
            return []
        self._remember(chunk)
        events: List[NormalizedEvent] = []
        for choice in chunk.choices:
            events.extend(self._choice_events(choice))
        return events

    def interpret_frame(self, frame: str) -> List[NormalizedEvent]:
        """Like ``interpret`` but for a raw SSE frame (skips non-data frames)."""
        payload = extract_payload(frame)
        return [] if payload is None else self.interpret(payload)

    def _remember(self, chunk: ChatCompletionChunk) -> None:
        if chunk.id and not self.response_id:
            self.response_id = chunk.id
        if chunk.model:
            self.model = chunk.model
        if chunk.usage:
            self.usage = chunk.usage

    def _choice_events(self, choice: ChunkChoice) -> List[NormalizedEvent]:
        if choice.finish_reason:
            self.finish_reason = choice.finish_reason
        events: List[NormalizedEvent] = []
        delta = choice.delta
        if delta.content:
            events.append(TextDelta(delta.content))
        for call in delta.tool_calls:
            fn = call.function
            arguments = (fn.arguments if fn else None) or ""
            events.append(
                ToolCallDelta(
                    index=call.index,
                    call_id=call.id,
                    name=fn.name if fn else None,
                    arguments=arguments,
                    parameters=decode_arguments(arguments),
                )
            )
        return events

    def done(self) -> StreamDone:
        """Build the terminal event from what the stream reported."""
        return StreamDone(
            finish_reason=self.finish_reason,
            model=self.model or self.requested_model,
            response_id=self.response_id,
            usage=normalize_usage(self.usage),
            decode_errors=len(self.errors),
        )


__all__ = ["ChunkInterpreter"]
