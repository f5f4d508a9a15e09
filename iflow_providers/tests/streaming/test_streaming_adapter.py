"""Stream adapter tests across the three body shapes.

push: threaded and synchronous emitters, mid-stream errors, cancellation.
pull: ``read(size)`` readers.
fallback: in-memory values, iterables of chunks, uncoercible objects.
"""
from __future__ import annotations

import io
import json

import pytest

from iflow_providers.base.cancellation import CancellationToken
from iflow_providers.base.errors import ErrorCode, ProviderError, TransportError
from iflow_providers.base.streaming import (
    StreamAdapter,
    StreamDone,
    TextDelta,
    ToolCallDelta,
    coerce_to_text,
    detect_source_shape,
)
from iflow_providers.base.streaming.streaming_adapter_helpers import as_transport_error


def _text(value: str) -> str:
    return f"data: {json.dumps({'choices': [{'delta': {'content': value}}]})}\n\n"


def _finish(reason: str = "stop") -> str:
    return f"data: {json.dumps({'choices': [{'delta': {}, 'finish_reason': reason}]})}\n\n"


HELLO_BODY = _text("Hello") + _text(" world") + _finish() + "data: [DONE]\n\n"


def _split(text: str, size: int):
    raw = text.encode("utf-8")
    return [raw[i:i + size] for i in range(0, len(raw), size)]


def _adapter(body, token=None, **kwargs) -> StreamAdapter:
    return StreamAdapter(body, provider_name="iflow", model="qwen3-max", cancellation_token=token, **kwargs)


def _texts(events):
    return "".join(e.value for e in events if isinstance(e, TextDelta))


# ---------------------------------------------------------------- detection
class _Reader:
    def read(self, size=-1):
        return b""


class _Emitter:
    def on(self, event, cb):
        return self

    def read(self, size=-1):  # push wins over pull
        return b""


def test_detect_source_shape():
    assert detect_source_shape(_Emitter()) == "push"  # nosec B101
    assert detect_source_shape(_Reader()) == "pull"  # nosec B101
    assert detect_source_shape(io.BytesIO(b"")) == "pull"  # nosec B101
    assert detect_source_shape(b"data") == "fallback"  # nosec B101
    assert detect_source_shape(None) == "fallback"  # nosec B101


# --------------------------------------------------------------------- push
def test_push_source_streams_across_chunk_boundaries(push_source):
    source = push_source(_split(HELLO_BODY, 7))
    events = list(_adapter(source, CancellationToken()).run())

    assert events[:2] == [TextDelta("Hello"), TextDelta(" world")]  # nosec B101
    assert isinstance(events[-1], StreamDone) and events[-1].finish_reason == "stop"  # nosec B101
    assert sum(isinstance(e, StreamDone) for e in events) == 1  # nosec B101
    assert source.closed  # nosec B101


def test_push_source_subscribes_data_last_and_may_emit_synchronously(push_source):
    source = push_source([HELLO_BODY], synchronous=True)
    events = list(_adapter(source).run())
    assert source.subscribe_order == ["end", "error", "data"]  # nosec B101
    assert _texts(events) == "Hello world"  # nosec B101


def test_push_trailing_frame_without_delimiter_is_flushed_on_end(push_source):
    source = push_source([_text("a"), _text("b").rstrip("\n")])
    events = list(_adapter(source).run())
    assert _texts(events) == "ab"  # nosec B101


def test_push_error_raised_after_queued_frames_drain(push_source, providers_log):
    source = push_source([_text("partial")], fail_with=ConnectionResetError("connection reset by peer"))
    run = _adapter(source).run()
    assert next(run) == TextDelta("partial")  # nosec B101
    with pytest.raises(TransportError) as info:
        next(run)
    assert info.value.code is ErrorCode.TRANSIENT  # nosec B101
    assert "connection reset" in info.value.message  # nosec B101
    assert source.closed  # nosec B101
    assert providers_log.named("stream.adapter.error")  # nosec B101


def test_push_error_given_as_string(push_source):
    source = push_source([], fail_with="socket hang up")
    with pytest.raises(TransportError, match="socket hang up"):
        list(_adapter(source).run())


def test_push_cancellation_mid_stream_ends_quietly(push_source, token, providers_log):
    source = push_source([_text("a"), _text("b"), _finish()], hold_after=1)
    run = _adapter(source, token).run()
    assert next(run) == TextDelta("a")  # nosec B101

    token.cancel("user stop")
    source.release.set()
    assert list(run) == []  # nosec B101
    assert source.closed  # nosec B101
    assert providers_log.named("stream.adapter.cancelled")  # nosec B101
    assert not providers_log.named("stream.adapter.end")  # nosec B101


def test_push_unsupported_chunk_is_skipped(push_source, providers_log):
    source = push_source([object(), _text("ok")])
    events = list(_adapter(source).run())
    assert _texts(events) == "ok"  # nosec B101
    assert providers_log.named("stream.push.unsupported_chunk")  # nosec B101


# --------------------------------------------------------------------- pull
def test_pull_reader_is_read_in_chunks_then_burst():
    body = io.BytesIO((HELLO_BODY).encode("utf-8"))
    events = list(_adapter(body, read_chunk_bytes=5).run())
    assert _texts(events) == "Hello world"  # nosec B101
    assert isinstance(events[-1], StreamDone)  # nosec B101
    assert body.closed  # nosec B101


def test_pull_cancelled_before_start_yields_nothing(token):
    body = io.BytesIO(HELLO_BODY.encode("utf-8"))
    token.cancel()
    assert list(_adapter(body, token).run()) == []  # nosec B101
    assert body.closed  # nosec B101


class _CancellingReader:
    def __init__(self, token: CancellationToken, data: bytes) -> None:
        self.token = token
        self.data = io.BytesIO(data)
        self.reads = 0

    def read(self, size: int) -> bytes:
        self.reads += 1
        chunk = self.data.read(size)
        if self.reads == 1:
            self.token.cancel()
        return chunk


def test_pull_cancellation_between_reads(token):
    reader = _CancellingReader(token, HELLO_BODY.encode("utf-8"))
    assert list(_adapter(reader, token, read_chunk_bytes=4).run()) == []  # nosec B101
    assert reader.reads == 1  # nosec B101


class _FailingReader:
    def read(self, size: int) -> bytes:
        raise OSError("read failed")


def test_pull_read_failure_becomes_transport_error():
    with pytest.raises(TransportError, match="read failed"):
        list(_adapter(_FailingReader()).run())


# ----------------------------------------------------------------- fallback
class _TextHolder:
    def __init__(self, text: str) -> None:
        self.text = text


class _Stringish:
    def __str__(self) -> str:
        return HELLO_BODY


@pytest.mark.parametrize(
    "body",
    [
        HELLO_BODY.encode("utf-8"),
        bytearray(HELLO_BODY.encode("utf-8")),
        HELLO_BODY,
        _TextHolder(HELLO_BODY),
        _Stringish(),
        _split(HELLO_BODY, 3),
        [HELLO_BODY[:10], HELLO_BODY[10:]],
    ],
    ids=["bytes", "bytearray", "str", "text-attr", "own-str", "byte-chunks", "str-chunks"],
)
def test_fallback_bodies(body):
    events = list(_adapter(body).run())
    assert _texts(events) == "Hello world"  # nosec B101
    assert isinstance(events[-1], StreamDone)  # nosec B101


def test_fallback_byte_chunks_split_inside_multibyte_character():
    raw = _text("naïve ✓").encode("utf-8")
    events = list(_adapter(_split(raw.decode("utf-8"), 1)).run())
    assert _texts(events) == "naïve ✓"  # nosec B101


def test_fallback_plain_object_never_stringified(providers_log):
    events = list(_adapter(object()).run())
    assert events == [StreamDone(model="qwen3-max", usage={"prompt": None, "completion": None, "total": None})]  # nosec B101
    logged = providers_log.named("stream.fallback.unsupported_body")
    assert logged and logged[-1]["body_type"] == "object"  # nosec B101


def test_fallback_empty_body_only_done():
    events = list(_adapter(None).run())
    assert len(events) == 1 and isinstance(events[0], StreamDone)  # nosec B101


def test_coerce_to_text_rules():
    assert coerce_to_text(b"abc") == "abc"  # nosec B101
    assert coerce_to_text("abc") == "abc"  # nosec B101
    assert coerce_to_text(_TextHolder("t")) == "t"  # nosec B101
    assert coerce_to_text(object()) is None  # nosec B101
    assert coerce_to_text([b"a"]) is None  # nosec B101


# --------------------------------------------------------- frames & metrics
def test_malformed_frame_does_not_end_stream(providers_log):
    body = _text("a") + "data: {oops\n\n" + _text("b") + _finish()
    events = list(_adapter(body).run())
    assert _texts(events) == "ab"  # nosec B101
    done = events[-1]
    assert isinstance(done, StreamDone) and done.decode_errors == 1  # nosec B101
    end = providers_log.named("stream.adapter.end")[-1]
    assert end["decode_errors"] == 1 and end["emitted_count"] == 2  # nosec B101
    assert end["source_shape"] == "fallback" and end["phase"] == "finalize"  # nosec B101


def _usage_frame(prompt, completion, total):
    usage = {"prompt_tokens": prompt, "completion_tokens": completion, "total_tokens": total}
    return f"data: {json.dumps({'choices': [], 'usage': usage})}\n\n"


def test_inconsistent_usage_is_flagged_on_end_event(providers_log):
    list(_adapter(_text("a") + _finish() + _usage_frame(2, 2, 5)).run())
    end = providers_log.named("stream.adapter.end")[-1]
    assert end["tokens"] == {"prompt": 2, "completion": 2, "total": 5}  # nosec B101
    assert "total_tokens mismatch" in end["usage_issue"]  # nosec B101


def test_consistent_usage_has_no_issue(providers_log):
    list(_adapter(_text("a") + _finish() + _usage_frame(2, 3, 5)).run())
    end = providers_log.named("stream.adapter.end")[-1]
    assert end["tokens"]["total"] == 5 and "usage_issue" not in end  # nosec B101


def test_tool_call_deltas_keep_arrival_order():
    chunk = {
        "choices": [
            {
                "delta": {
                    "content": "calling",
                    "tool_calls": [{"index": 0, "id": "call_1", "function": {"name": "f", "arguments": "{}"}}],
                }
            }
        ]
    }
    body = f"data: {json.dumps(chunk)}\n\n" + _finish("tool_calls")
    events = list(_adapter(body).run())
    assert isinstance(events[0], TextDelta) and isinstance(events[1], ToolCallDelta)  # nosec B101
    assert events[1].parameters == {}  # nosec B101
    assert events[-1].finish_reason == "tool_calls"  # nosec B101


def test_usage_reaches_done_and_metrics():
    usage_chunk = {"choices": [], "usage": {"prompt_tokens": 4, "completion_tokens": 6, "total_tokens": 10}}
    adapter = _adapter(_text("x") + f"data: {json.dumps(usage_chunk)}\n\n")
    events = list(adapter.run())
    assert events[-1].usage == {"prompt": 4, "completion": 6, "total": 10}  # nosec B101
    assert adapter.metrics.emitted == 1 and adapter.metrics.total_tokens == 10  # nosec B101
    assert adapter.metrics.time_to_first_event_ms is not None  # nosec B101


def test_adapter_runs_once():
    adapter = _adapter(HELLO_BODY)
    list(adapter.run())
    with pytest.raises(RuntimeError):
        list(adapter.run())


def test_on_complete_receives_outcome():
    outcomes = []
    list(_adapter(HELLO_BODY, on_complete=outcomes.append).run())
    assert outcomes == ["end"]  # nosec B101


def test_as_transport_error_passthrough_and_classification():
    original = TransportError(code=ErrorCode.AUTH, message="x", provider="iflow")
    assert as_transport_error(original, provider="iflow", model=None) is original  # nosec B101
    err = as_transport_error(TimeoutError("read timed out"), provider="iflow", model="m")
    assert isinstance(err, ProviderError) and err.code is ErrorCode.TIMEOUT  # nosec B101
