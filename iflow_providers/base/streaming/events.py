"""Normalized stream events.

Every streamed response is reduced to three event kinds, produced lazily and
consumed once each, in arrival order:

``TextDelta``
    A fragment of assistant text, to be concatenated with earlier fragments.
``ToolCallDelta``
    A fragment of one tool call. ``index`` addresses the logical call within
    the response turn; ``call_id`` and ``name`` usually arrive only on the
    first fragment of a call.
``StreamDone``
    Exactly one, last, on normal completion. Not emitted after cancellation
    or when the stream fails.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class TextDelta:
    value: str


@dataclass(frozen=True)
class ToolCallDelta:
    """Incremental tool-call fragment.

    Attributes:
        index: Position of the logical call within the response turn.
        call_id: Vendor call identifier when present on this fragment.
        name: Function name when present on this fragment.
        arguments: Raw argument JSON fragment exactly as received.
        parameters: ``arguments`` decoded to an object when the fragment is a
            complete JSON object (``{}`` when empty or absent), otherwise
            ``None`` and the consumer reassembles fragments by ``index``.
    """

    index: int
    call_id: Optional[str] = None
    name: Optional[str] = None
    arguments: str = ""
    parameters: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class StreamDone:
    """Terminal marker with what the stream reported about itself."""

    finish_reason: Optional[str] = None
    model: Optional[str] = None
    response_id: Optional[str] = None
    usage: Dict[str, Optional[int]] = field(default_factory=dict)
    decode_errors: int = 0


NormalizedEvent = Union[TextDelta, ToolCallDelta, StreamDone]


__all__ = ["TextDelta", "ToolCallDelta", "StreamDone", "NormalizedEvent"]
