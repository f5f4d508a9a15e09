"""accumulate_events: one ChatResponse from a normalized event stream."""
from __future__ import annotations

from iflow_providers.base.errors import ErrorCode, TransportError
from iflow_providers.base.streaming import (
    StreamAdapter,
    StreamDone,
    TextDelta,
    ToolCallDelta,
    accumulate_events,
    format_stream_error,
)


def test_text_and_tool_calls_are_assembled():
    events = [
        TextDelta("Hel"),
        TextDelta("lo"),
        ToolCallDelta(index=0, call_id="call_1", name="lookup", arguments='{"q":'),
        ToolCallDelta(index=0, arguments='"x"}'),
        StreamDone(finish_reason="tool_calls", model="qwen3-max", response_id="r1", usage={"prompt": 1, "completion": 2, "total": 3}),
    ]
    resp = accumulate_events(events, provider="iflow", model="requested")
    assert resp.text == "Hello"  # nosec B101
    assert [c.arguments for c in resp.tool_calls] == [{"q": "x"}]  # nosec B101
    assert resp.finish_reason == "tool_calls"  # nosec B101
    assert resp.meta.model_name == "qwen3-max" and resp.meta.response_id == "r1"  # nosec B101
    assert resp.meta.usage == {"prompt": 1, "completion": 2, "total": 3}  # nosec B101
    assert resp.meta.extra["stream_events"] == 5  # nosec B101
    assert resp.to_dict()["tool_calls"][0]["name"] == "lookup"  # nosec B101


def _failing_stream():
    yield TextDelta("partial")
    raise TransportError(code=ErrorCode.TRANSIENT, message="connection reset", provider="iflow")


def test_mid_stream_error_is_appended_as_single_line():
    resp = accumulate_events(_failing_stream(), provider="iflow", model="qwen3-max")
    assert resp.text == "partial\n[error: transient: connection reset]"  # nosec B101
    assert resp.text.count("[error:") == 1  # nosec B101
    assert resp.finish_reason is None and resp.meta.extra["stream_error"] == "transient"  # nosec B101


def test_error_without_partial_text():
    def stream():
        raise TransportError(code=ErrorCode.AUTH, message="HTTP 401", provider="iflow")
        yield  # pragma: no cover

    resp = accumulate_events(stream())
    assert resp.text == "[error: auth: HTTP 401]"  # nosec B101


def test_format_stream_error():
    err = TransportError(code=ErrorCode.TIMEOUT, message="no response within 60s", provider="iflow")
    assert format_stream_error(err) == "[error: timeout: no response within 60s]"  # nosec B101


def test_cancelled_stream_keeps_partial_text_without_error():
    resp = accumulate_events(iter([TextDelta("so far")]))
    assert resp.text == "so far" and resp.finish_reason is None  # nosec B101
    assert resp.meta.model_name == "unknown"  # nosec B101


def _tool_frame(index, arguments, call_id=None, name=None):
    entry = {"index": index, "function": {"arguments": arguments}}
    if call_id:
        entry["id"] = call_id
        entry["type"] = "function"
        entry["function"]["name"] = name
    return {"choices": [{"index": 0, "delta": {"tool_calls": [entry]}}]}


def test_interleaved_tool_call_frames_reassemble_by_index(sse_body):
    body = sse_body(
        _tool_frame(0, '{"x":', call_id="call_a", name="f"),
        _tool_frame(1, '{"y":', call_id="call_b", name="g"),
        _tool_frame(0, " 1}"),
        _tool_frame(1, " 2}"),
        {"choices": [{"index": 0, "delta": {}, "finish_reason": "tool_calls"}]},
    )
    resp = accumulate_events(StreamAdapter(body, provider_name="iflow", model="qwen3-max").run())

    assert [(c.call_id, c.name, c.arguments) for c in resp.tool_calls] == [  # nosec B101
        ("call_a", "f", {"x": 1}),
        ("call_b", "g", {"y": 2}),
    ]
    assert resp.finish_reason == "tool_calls"  # nosec B101
