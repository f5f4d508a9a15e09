"""
Message DTO used by the chat request pipeline.

Defines the immutable `Message` dataclass and the `Role` literal. Roles are
kept as free strings because hosts may hand over roles the vendor does not
know (``"tool"``, custom names); the translator maps anything unknown to
``"user"`` rather than failing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Literal, Tuple, Union

from .content_part import ContentPart


# Roles understood by the vendor wire schema.
Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class Message:
    """A chat message made of one or more content parts.

    Attributes:
        role: Author role. Usually one of ``Role`` but any string is accepted.
        content: Ordered, non-empty tuple of `ContentPart`.

    Raises:
        ValueError: If constructed without any content part.
    """

    role: str
    content: Tuple[ContentPart, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.content, tuple):
            object.__setattr__(self, "content", tuple(self.content))
        if not self.content:
            raise ValueError("a message needs at least one content part")

    @classmethod
    def text(cls, role: str, value: str) -> "Message":
        """Shortcut for the common single-text-part message."""
        return cls(role=role, content=(ContentPart.from_text(value),))

    @classmethod
    def of(cls, role: str, parts: Iterable[Union[ContentPart, str]]) -> "Message":
        """Build a message from parts, wrapping bare strings as text parts."""
        return cls(
            role=role,
            content=tuple(p if isinstance(p, ContentPart) else ContentPart.from_text(p) for p in parts),
        )

    def text_parts(self) -> List[str]:
        return [p.text or "" for p in self.content if p.is_text]


__all__ = [
    "Message",
    "Role",
]
