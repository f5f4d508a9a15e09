"""Configuration error raised when a request cannot even be attempted.

The canonical case is a missing API key: the adapter fails fast before any
network call, and model listing degrades to an empty list instead.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class ConfigurationError(ProviderError):
    """Missing or unusable local configuration (never retryable)."""

    code: ErrorCode = field(default=ErrorCode.CONFIGURATION)
    message: str = "missing_api_key"
    provider: str = "unknown"


__all__ = ["ConfigurationError"]
