"""
ChatResponse DTO: the accumulated result of a drained event stream.

Produced by ``base.streaming.accumulate_events`` for callers that want a
single value instead of consuming deltas. The ``raw`` field is excluded from
default serialization so large objects are never logged by accident.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .provider_metadata import ProviderMetadata

if TYPE_CHECKING:  # pragma: no cover
    from ..streaming.tool_calls import ToolCall


@dataclass
class ChatResponse:
    """Provider-agnostic result of one chat completion.

    Attributes:
        text: Concatenated text deltas (plus a trailing error line when the
            stream failed part-way).
        tool_calls: Tool calls reassembled by index, in index order.
        finish_reason: Vendor finish reason, if one was reported.
        raw: Optional diagnostics object.
        meta: Execution `ProviderMetadata`.
    """

    text: str
    meta: ProviderMetadata
    tool_calls: List["ToolCall"] = field(default_factory=list)
    finish_reason: Optional[str] = None
    raw: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary excluding raw objects."""
        return {
            "text": self.text,
            "tool_calls": [c.to_dict() for c in self.tool_calls],
            "finish_reason": self.finish_reason,
            "raw": None,
            "meta": self.meta.to_dict(),
        }


__all__ = [
    "ChatResponse",
]
