"""Reassembly of tool calls from index-addressed deltas.

The vendor streams each tool call as several ``ToolCallDelta`` fragments
sharing an ``index``; the id and name usually come first and the argument
JSON grows across fragments. Fragments for different indexes may
interleave, so ``ToolCallAccumulator`` keeps one record per index for the
whole response turn in an explicit mapping and flushes them all, in index
order, when the stream ends (``finish``). A reappearing index always merges
into its existing record.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .events import ToolCallDelta


@dataclass(frozen=True)
class ToolCall:
    """A fully reassembled tool call.

    Attributes:
        index: Position within the response turn.
        call_id: Vendor call id (empty when the vendor never sent one).
        name: Function name.
        arguments: Decoded argument object (``{}`` when empty or unparsable).
        raw_arguments: Concatenated argument text as received.
        arguments_valid: False when ``raw_arguments`` was not a JSON object.
    """

    index: int
    call_id: str
    name: str
    arguments: Dict[str, Any]
    raw_arguments: str = ""
    arguments_valid: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "id": self.call_id,
            "name": self.name,
            "arguments": self.arguments,
            "arguments_valid": self.arguments_valid,
        }


def decode_arguments(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    """Decode an argument string; ``{}`` for empty, ``None`` unless a JSON object."""
    if raw is None or not raw.strip():
        return {}
    try:
        value = json.loads(raw)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


@dataclass
class _PendingCall:
    index: int
    call_id: str = ""
    name: str = ""
    parts: List[str] = field(default_factory=list)

    def merge(self, delta: ToolCallDelta) -> None:
        if delta.call_id:
            self.call_id = delta.call_id
        if delta.name:
            self.name = delta.name
        if delta.arguments:
            self.parts.append(delta.arguments)

    def build(self) -> ToolCall:
        raw = "".join(self.parts)
        decoded = decode_arguments(raw)
        return ToolCall(
            index=self.index,
            call_id=self.call_id,
            name=self.name,
            arguments=decoded if decoded is not None else {},
            raw_arguments=raw,
            arguments_valid=decoded is not None,
        )


class ToolCallAccumulator:
    """Explicit ``index -> pending call`` map, flushed once at stream end."""

    def __init__(self) -> None:
        self._pending: Dict[int, _PendingCall] = {}

    @property
    def pending_indexes(self) -> List[int]:
        return sorted(self._pending)

    def add(self, delta: ToolCallDelta) -> None:
        """Merge ``delta`` into the record for its index, creating it on first sight."""
        pending = self._pending.get(delta.index)
        if pending is None:
            pending = self._pending[delta.index] = _PendingCall(index=delta.index)
        pending.merge(delta)

    def finish(self) -> List[ToolCall]:
        """Flush every record in index order; the accumulator is empty afterwards."""
        ready = [self._pending[i].build() for i in sorted(self._pending)]
        self._pending.clear()
        return ready


__all__ = ["ToolCall", "ToolCallAccumulator", "decode_arguments"]
