"""
Content part model for chat messages.

A message is an ordered sequence of parts. Two kinds are understood by the
vendor wire schema: plain text and images. Image payloads keep whatever
binary representation the host handed over (``bytes``, ``bytearray``,
``memoryview``, array-like objects exposing ``buffer`` or ``tobytes``); the
message translator is responsible for turning that into base64.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional


ContentPartType = Literal[
    "text",   # Plain text content
    "image",  # Binary image with a MIME type
]


@dataclass(frozen=True)
class ContentPart:
    """A single piece of message content.

    Attributes:
        type: ``"text"`` or ``"image"``.
        text: Text value for text parts.
        mime_type: MIME type for image parts (e.g. ``"image/png"``).
        data: Binary payload for image parts in any supported representation; see
            ``base.translation.encode_image_data`` for accepted shapes.
    """

    type: ContentPartType
    text: Optional[str] = None
    mime_type: Optional[str] = None
    data: Any = None

    @classmethod
    def from_text(cls, value: str) -> "ContentPart":
        return cls(type="text", text=value)

    @classmethod
    def from_image(cls, mime_type: str, data: Any) -> "ContentPart":
        return cls(type="image", mime_type=mime_type, data=data)

    @property
    def is_text(self) -> bool:
        return self.type == "text"

    def to_dict(self) -> Dict[str, Any]:
        """Return a log-friendly dictionary; binary payloads are summarized by size."""
        if self.type == "text":
            return {"type": "text", "text": self.text}
        size = len(self.data) if isinstance(self.data, (bytes, bytearray, memoryview)) else None
        return {"type": "image", "mime_type": self.mime_type, "bytes": size}


__all__ = [
    "ContentPart",
    "ContentPartType",
]
