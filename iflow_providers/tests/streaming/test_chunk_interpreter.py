"""Chunk interpreter tests.

Malformed frames are recorded and skipped, never raised; text precedes
tool-call deltas within a choice; stream-level facts reach StreamDone.
"""
from __future__ import annotations

import json

from iflow_providers.base.errors import DecodeError, ErrorCode
from iflow_providers.base.streaming import ChunkInterpreter, StreamDone, TextDelta, ToolCallDelta


def _chunk(content=None, tool_calls=None, finish_reason=None, **extra):
    delta = {}
    if content is not None:
        delta["content"] = content
    if tool_calls is not None:
        delta["tool_calls"] = tool_calls
    return json.dumps({"choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}], **extra})


def test_malformed_frame_between_good_frames_is_skipped(providers_log):
    interp = ChunkInterpreter(provider="iflow", model="qwen3-max")
    events = []
    for payload in (_chunk("a"), "{not json", _chunk("b")):
        events.extend(interp.interpret(payload))

    assert events == [TextDelta("a"), TextDelta("b")]  # nosec B101
    assert len(interp.errors) == 1  # nosec B101
    err = interp.errors[0]
    assert isinstance(err, DecodeError) and err.code is ErrorCode.DECODE  # nosec B101
    assert err.payload_preview == "{not json"  # nosec B101
    logged = providers_log.named("stream.decode_error")
    assert logged and logged[-1]["error_code"] == "decode"  # nosec B101
    assert interp.done().decode_errors == 1  # nosec B101


def test_non_object_and_schema_mismatch_are_decode_errors():
    interp = ChunkInterpreter()
    assert interp.interpret("[1, 2]") == []  # nosec B101
    assert interp.interpret('{"choices": "nope"}') == []  # nosec B101
    assert len(interp.errors) == 2  # nosec B101


def test_missing_and_null_fields_are_tolerated():
    interp = ChunkInterpreter()
    assert interp.interpret("{}") == []  # nosec B101
    assert interp.interpret('{"choices": null}') == []  # nosec B101
    assert interp.interpret('{"choices": [{"delta": {"content": null, "tool_calls": null}}]}') == []  # nosec B101
    assert interp.interpret('{"choices": [{"delta": null}]}') == []  # nosec B101
    assert interp.interpret('{"choices": [{"delta": {"content": ""}}], "extra": 1}') == []  # nosec B101
    assert interp.errors == []  # nosec B101


def test_null_delta_keeps_finish_reason_and_sibling_choices():
    interp = ChunkInterpreter()
    payload = '{"choices": [{"index": 0, "delta": null, "finish_reason": "stop"}, {"index": 1, "delta": {"content": "ok"}}]}'
    assert interp.interpret(payload) == [TextDelta("ok")]  # nosec B101
    assert interp.finish_reason == "stop" and interp.errors == []  # nosec B101
    assert interp.done().finish_reason == "stop"  # nosec B101


def test_sentinel_and_non_data_frames_are_ignored():
    interp = ChunkInterpreter()
    assert interp.interpret_frame("data: [DONE]") == []  # nosec B101
    assert interp.interpret_frame(": ping") == []  # nosec B101
    assert interp.errors == []  # nosec B101


def test_text_precedes_tool_calls_and_parameters_are_decoded():
    interp = ChunkInterpreter()
    payload = _chunk(
        "checking",
        tool_calls=[
            {"index": 0, "id": "call_1", "type": "function", "function": {"name": "get_weather", "arguments": '{"city":"Paris"}'}},
            {"index": 1, "id": "call_2", "function": {"name": "noop"}},
            {"index": 2, "function": {"arguments": '{"ci'}},
        ],
    )
    events = interp.interpret(payload)
    assert events[0] == TextDelta("checking")  # nosec B101
    first, second, third = events[1:]
    assert first == ToolCallDelta(  # nosec B101
        index=0, call_id="call_1", name="get_weather", arguments='{"city":"Paris"}', parameters={"city": "Paris"}
    )
    assert second.parameters == {} and second.arguments == ""  # nosec B101
    assert third.parameters is None and third.name is None  # nosec B101


def test_done_reports_stream_facts():
    interp = ChunkInterpreter(model="requested")
    interp.interpret(_chunk("x", id="resp-1", model="qwen3-max"))
    interp.interpret(_chunk(finish_reason="stop", id="resp-2", usage={"prompt_tokens": 5, "completion_tokens": 2}))
    done = interp.done()
    assert isinstance(done, StreamDone)  # nosec B101
    assert done.finish_reason == "stop" and done.model == "qwen3-max"  # nosec B101
    assert done.response_id == "resp-1"  # nosec B101
    assert done.usage == {"prompt": 5, "completion": 2, "total": 7}  # nosec B101


def test_done_defaults_to_requested_model():
    done = ChunkInterpreter(model="qwen3-max").done()
    assert done.model == "qwen3-max" and done.finish_reason is None  # nosec B101
    assert done.usage == {"prompt": None, "completion": None, "total": None}  # nosec B101
