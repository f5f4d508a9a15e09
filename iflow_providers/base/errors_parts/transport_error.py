"""Transport error for failed HTTP exchanges.

Raised for non-200 responses (with the vendor's error body), network
failures, timeouts while waiting for headers, and errors signalled by a push
source mid-stream. Terminal for the current request; no retry is attempted
inside the transport.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class TransportError(ProviderError):
    """HTTP/network failure carrying the response status and body when known.

    Attributes:
        status: HTTP status code, or ``None`` when no response was received.
        body: Error body text read from the response (may be empty).
    """

    code: ErrorCode = field(default=ErrorCode.TRANSIENT)
    message: str = ""
    provider: str = "unknown"
    status: Optional[int] = None
    body: str = ""

    def __str__(self) -> str:  # pragma: no cover - trivial
        status = self.status if self.status is not None else "-"
        return f"{self.provider}:{self.model or '-'} {self.code.value} [{status}]: {self.message}"


__all__ = ["TransportError"]
