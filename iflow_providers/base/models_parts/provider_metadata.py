"""
Provider call metadata model.

Attached to accumulated responses for observability: which model answered,
the response id reported by the stream, latency and usage figures.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional


@dataclass
class ProviderMetadata:
    """Execution metadata for a provider call.

    Attributes:
        provider_name: Canonical provider key (e.g., ``"iflow"``).
        model_name: Model name reported by the stream (or requested).
        http_status: HTTP status of the response.
        response_id: Vendor response identifier when reported.
        latency_ms: Time until the stream was drained, in milliseconds.
        usage: Token usage block when the vendor reported one.
        extra: Opaque, JSON-serializable map for adapter-specific diagnostics.
    """

    provider_name: str
    model_name: str
    http_status: Optional[int] = None
    response_id: Optional[str] = None
    latency_ms: Optional[float] = None
    usage: Optional[Dict[str, Any]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the metadata fields."""
        return asdict(self)


__all__ = [
    "ProviderMetadata",
]
