"""
ModelInfo DTO for provider model listings.

The vendor adapter advertises a single model entry (when a credential is
configured); host-specific details such as token limits and capability
flags are kept in generic fields.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class ModelInfo:
    """A single model listing entry.

    Attributes:
        id: Stable model identifier.
        name: Human-friendly display name.
        provider: Provider key owning this model.
        vendor: Display vendor name.
        family: Optional model family.
        version: Optional version label.
        max_input_tokens: Maximum prompt size.
        max_output_tokens: Output ceiling sent with each request.
        capabilities: Capability flags (``vision``, ``tool_calling``, ...).
    """

    id: str
    name: str
    provider: str
    vendor: Optional[str] = None
    family: Optional[str] = None
    version: Optional[str] = None
    max_input_tokens: Optional[int] = None
    max_output_tokens: Optional[int] = None
    capabilities: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return asdict(self)


__all__ = [
    "ModelInfo",
]
