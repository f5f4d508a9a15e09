"""
Pydantic schema of one streamed chat-completion chunk.

Each ``data:`` frame of the vendor's ``text/event-stream`` carries a JSON
object shaped like::

    {"id": "...", "model": "...",
     "choices": [{"index": 0,
                  "delta": {"role": "assistant", "content": "...",
                            "tool_calls": [{"index": 0, "id": "call_1",
                                            "type": "function",
                                            "function": {"name": "...",
                                                         "arguments": "..."}}]},
                  "finish_reason": null}],
     "usage": {...}}

Every field is optional and extra keys are ignored: vendors add fields over
time and a missing field must not turn a usable frame into a decode error.
An explicit ``null`` list or delta counts as empty. Only type mismatches (for example
``choices`` being a string) fail validation.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore")


class FunctionDelta(_Lenient):
    name: Optional[str] = None
    arguments: Optional[str] = None


class ToolCallChunk(_Lenient):
    """One tool-call fragment; ``index`` addresses the logical call."""

    index: int = 0
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[FunctionDelta] = None


class ChoiceDelta(_Lenient):
    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: List[ToolCallChunk] = Field(default_factory=list)

    @field_validator("tool_calls", mode="before")
    @classmethod
    def null_tool_calls_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ChunkChoice(_Lenient):
    index: int = 0
    delta: ChoiceDelta = Field(default_factory=ChoiceDelta)
    finish_reason: Optional[str] = None

    @field_validator("delta", mode="before")
    @classmethod
    def null_delta_as_empty(cls, value: Any) -> Any:
        return ChoiceDelta() if value is None else value


class ChatCompletionChunk(_Lenient):
    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[ChunkChoice] = Field(default_factory=list)
    usage: Optional[Dict[str, Any]] = None

    @field_validator("choices", mode="before")
    @classmethod
    def null_choices_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


__all__ = [
    "FunctionDelta",
    "ToolCallChunk",
    "ChoiceDelta",
    "ChunkChoice",
    "ChatCompletionChunk",
]
