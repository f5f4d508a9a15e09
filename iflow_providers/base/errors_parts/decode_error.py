"""Decode error describing one malformed stream frame.

Instances are recorded by the chunk interpreter for diagnostics; the frame is
skipped and decoding continues with the next frame.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class DecodeError(ProviderError):
    """A frame payload that could not be parsed or validated.

    Attributes:
        payload_preview: First characters of the offending payload.
    """

    code: ErrorCode = field(default=ErrorCode.DECODE)
    message: str = ""
    provider: str = "unknown"
    payload_preview: str = ""


__all__ = ["DecodeError"]
