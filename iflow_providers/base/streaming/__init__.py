"""Streaming package for the provider layer.

Exposes the SSE decoder, chunk interpreter, stream adapter, tool-call
reassembly, metrics and accumulation helpers under a single namespace.
"""

from .events import NormalizedEvent, StreamDone, TextDelta, ToolCallDelta
from .sse_decoder import DecoderState, SseFrameDecoder, extract_payload, iter_payloads, split_frames
from .chunk_interpreter import ChunkInterpreter
from .tool_calls import ToolCall, ToolCallAccumulator, decode_arguments
from .stream_state import StreamState
from .streaming import accumulate_events, format_stream_error
from .streaming_metrics import StreamMetrics, apply_token_usage, validate_token_usage
from .streaming_finalize import finalize_stream
from .streaming_adapter_helpers import SourceShape, coerce_to_text, detect_source_shape
from .streaming_adapter import StreamAdapter
from .stream_controller import ChatResponseStream, StreamController

__all__ = [
    "NormalizedEvent",
    "StreamDone",
    "TextDelta",
    "ToolCallDelta",
    "DecoderState",
    "SseFrameDecoder",
    "extract_payload",
    "iter_payloads",
    "split_frames",
    "ChunkInterpreter",
    "ToolCall",
    "ToolCallAccumulator",
    "decode_arguments",
    "StreamState",
    "accumulate_events",
    "format_stream_error",
    "StreamMetrics",
    "apply_token_usage",
    "validate_token_usage",
    "finalize_stream",
    "SourceShape",
    "coerce_to_text",
    "detect_source_shape",
    "StreamAdapter",
    "StreamController",
    "ChatResponseStream",
]
