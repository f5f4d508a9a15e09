"""
CompletionRequest DTO: the fully resolved chat-completion call.

Built fresh for every call by the vendor adapter from the caller's messages
and validated options, then handed to the translator which turns it into
the JSON body. The streaming flag is always on for this package.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

from .message import Message
from .tool_spec import ToolSpec


ToolChoice = Literal["auto"]


@dataclass
class CompletionRequest:
    """Normalized request handed to the message translator.

    Attributes:
        model: Target model identifier.
        messages: Ordered list of `Message` instances.
        max_tokens: Output ceiling. Always sent; the adapter fills in the
            configured default when the caller does not choose one.
        temperature: Sampling temperature; omitted from the wire when ``None``.
        tools: Tool specifications offered to the model.
        tool_choice: ``"auto"`` when tools are offered, otherwise ``None``.
        stream: Always ``True``.
    """

    model: str
    messages: List[Message]
    max_tokens: int
    temperature: Optional[float] = None
    tools: List[ToolSpec] = field(default_factory=list)
    tool_choice: Optional[ToolChoice] = None
    stream: bool = True

    def __post_init__(self) -> None:
        # tools and tool_choice travel together
        self.tool_choice = "auto" if self.tools else None


__all__ = [
    "CompletionRequest",
    "ToolChoice",
]
