"""Stream adapter: one lazy event sequence over three body shapes.

Purpose
-------
``StreamAdapter.run()`` turns a raw response body into a forward-only,
single-pass iterator of ``NormalizedEvent``. The body shape is detected
once (see ``detect_source_shape``) and consumed by one of three loops:

push
    The source notifies ``data`` / ``end`` / ``error``. Callbacks decode
    frames into a queue held by ``StreamState``; the generator yields as soon
    as frames are queued and only blocks, for at most ``poll_interval``
    seconds at a time, while the queue is empty and the source has not
    ended. A source error is raised once the queued frames are drained.
pull
    ``read(size)`` is called until it returns an empty chunk, checking
    cancellation between reads. The buffered frames are then interpreted in
    one burst, in frame order.
fallback
    An in-memory value (or unknown shape) is coerced to text without ever
    falling back to ``object.__str__`` and then handled like pull.

Contract
--------
- Events keep the transport's arrival order across frames; within a frame,
  text precedes tool-call deltas as they appear in the choices.
- Normal completion ends with exactly one ``StreamDone``.
- Cancellation is checked before every yield and at every wait. Once seen
  the generator returns without draining buffered frames and without
  further events. Already emitted events stay emitted.
- Source failures surface as ``ProviderError`` (``TransportError`` unless
  already classified). Malformed frames never do; see ``ChunkInterpreter``.
- The source is closed on every exit path, including the consumer
  abandoning the iterator.
"""
from __future__ import annotations

import logging
import time
from contextlib import suppress
from typing import Any, Callable, Iterable, Iterator, List, Optional, Union

from ..cancellation import CancellationToken, CancelledError
from ..constants import PUSH_EVENT_DATA, PUSH_EVENT_END, PUSH_EVENT_ERROR
from ..errors import ProviderError
from ..logging import LogContext, get_logger, log_event
from ..timeouts import get_timeout_config
from .chunk_interpreter import ChunkInterpreter
from .events import NormalizedEvent, StreamDone
from .sse_decoder import SseFrameDecoder
from .stream_state import StreamState
from .streaming_adapter_helpers import (
    SourceShape,
    as_transport_error,
    close_source,
    coerce_to_text,
    detect_source_shape,
    fallback_chunks,
)
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics, apply_token_usage


class _Cancelled(Exception):
    """Internal signal: cancellation observed, unwind quietly."""


class StreamAdapter:
    """Adapts one response body into normalized events."""

    def __init__(
        self,
        body: Any,
        *,
        provider_name: str = "unknown",
        model: Optional[str] = None,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
        cancellation_token: Optional[CancellationToken] = None,
        interpreter: Optional[ChunkInterpreter] = None,
        poll_interval: Optional[float] = None,
        read_chunk_bytes: Optional[int] = None,
        on_complete: Optional[Callable[[str], None]] = None,
    ) -> None:
        timeouts = get_timeout_config()
        self.body = body
        self.provider_name = provider_name
        self.model = model
        self.ctx = ctx
        self._logger = logger or get_logger("providers.stream")
        self._token = cancellation_token
        self.interpreter = interpreter or ChunkInterpreter(
            provider=provider_name, model=model, ctx=ctx, logger=self._logger
        )
        self.poll_interval = poll_interval if poll_interval is not None else timeouts.stream_poll_interval_seconds
        self.read_chunk_bytes = read_chunk_bytes or timeouts.read_chunk_bytes
        self._on_complete = on_complete
        self.shape: SourceShape = detect_source_shape(body)
        self.metrics = StreamMetrics()
        self._t0 = 0.0
        self._started = False

    # ----------------------------------------------------------------- public
    @property
    def cancelled(self) -> bool:
        return self._token is not None and self._token.cancelled

    def run(self) -> Iterator[NormalizedEvent]:
        """Yield normalized events until the body ends, fails or is cancelled."""
        if self._started:
            raise RuntimeError("stream adapter runs only once")
        self._started = True
        self._t0 = time.perf_counter()
        log_event(self._logger, "stream.start", self.ctx, source_shape=self.shape)
        consume = {
            "push": self._consume_push,
            "pull": self._consume_pull,
            "fallback": self._consume_fallback,
        }[self.shape]
        try:
            for event in consume():
                self._ensure_not_cancelled()
                self._record_emit()
                yield event
            self._ensure_not_cancelled()
            done = self._done()
            yield done
        except (_Cancelled, CancelledError):
            self._finish("cancelled")
            return
        except ProviderError as err:
            self._finish("error", err)
            raise
        except Exception as exc:
            err = as_transport_error(exc, provider=self.provider_name, model=self.model)
            self._finish("error", err)
            raise err from exc
        finally:
            close_source(self.body)

    # ------------------------------------------------------------------ loops
    def _consume_push(self) -> Iterator[NormalizedEvent]:
        state = StreamState()
        # data last: sources may start flowing as soon as a data listener exists
        self.body.on(PUSH_EVENT_END, lambda *_: state.mark_ended())
        self.body.on(PUSH_EVENT_ERROR, lambda err=None, *_: state.mark_ended(self._source_error(err)))
        self.body.on(PUSH_EVENT_DATA, lambda chunk, *_: self._on_push_data(state, chunk))
        unregister = self._token.on_cancel(state.wake) if self._token is not None else None
        try:
            while True:
                frame = self._next_push_frame(state)
                if frame is None:
                    return
                yield from self.interpreter.interpret_frame(frame)
        finally:
            if unregister is not None:
                unregister()

    def _next_push_frame(self, state: StreamState) -> Optional[str]:
        """Pop the next queued frame, waiting while the source is still open.

        Returns ``None`` at a clean end. Raises the source error once the
        queue is drained.
        """
        with state.condition:
            while not state.frames and not state.ended:
                if self.cancelled:
                    break
                state.condition.wait(self.poll_interval)
            if self.cancelled:
                state.cancelled = True
                raise _Cancelled()
            if state.frames:
                return state.frames.popleft()
            if state.error is not None:
                raise as_transport_error(state.error, provider=self.provider_name, model=self.model)
            return None

    def _consume_pull(self) -> Iterator[NormalizedEvent]:
        decoder = SseFrameDecoder()
        frames: List[str] = []
        while True:
            self._ensure_not_cancelled()
            chunk = self.body.read(self.read_chunk_bytes)
            if not chunk:
                break
            frames.extend(decoder.feed(chunk))
        frames.extend(decoder.finish())
        yield from self._burst(frames)

    def _consume_fallback(self) -> Iterator[NormalizedEvent]:
        decoder = SseFrameDecoder()
        frames: List[str] = []
        for chunk in fallback_chunks(self.body, logger=self._logger, ctx=self.ctx):
            self._ensure_not_cancelled()
            frames.extend(decoder.feed(chunk))
        frames.extend(decoder.finish())
        yield from self._burst(frames)

    def _burst(self, frames: Iterable[str]) -> Iterator[NormalizedEvent]:
        for frame in frames:
            yield from self.interpreter.interpret_frame(frame)

    # ---------------------------------------------------------------- helpers
    def _on_push_data(self, state: StreamState, chunk: Any) -> None:
        if not isinstance(chunk, (str, bytes, bytearray, memoryview)):
            chunk = coerce_to_text(chunk)
            if chunk is None:
                log_event(self._logger, "stream.push.unsupported_chunk", self.ctx, level=logging.WARNING)
                return
        state.push_chunk(chunk)

    def _source_error(self, err: Union[BaseException, str, None]) -> BaseException:
        if isinstance(err, BaseException):
            return err
        return ConnectionError(str(err) if err is not None else "stream source error")

    def _ensure_not_cancelled(self) -> None:
        if self.cancelled:
            raise _Cancelled()

    def _record_emit(self) -> None:
        if self.metrics.emitted == 0:
            self.metrics.time_to_first_event_ms = (time.perf_counter() - self._t0) * 1000.0
        self.metrics.emitted += 1

    def _done(self) -> StreamDone:
        done = self.interpreter.done()
        apply_token_usage(self.metrics, done.usage)
        self._finish("end", finish_reason=done.finish_reason)
        return done

    def _finish(
        self,
        outcome: str,
        error: Optional[ProviderError] = None,
        *,
        finish_reason: Optional[str] = None,
    ) -> None:
        self.metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        self.metrics.decode_errors = len(self.interpreter.errors)
        finalize_stream(
            logger=self._logger,
            ctx=self.ctx,
            metrics=self.metrics,
            outcome=outcome,
            error_code=error.code.value if error is not None else None,
            error=error.message[:260] if error is not None else None,
            finish_reason=finish_reason,
            source_shape=self.shape,
        )
        if self._on_complete is not None:
            with suppress(Exception):
                self._on_complete(outcome)


__all__ = ["StreamAdapter"]
