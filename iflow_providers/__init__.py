"""iflow_providers package

Streaming chat-completion adapter for the iFlow API.

Purpose:
    Translate host chat messages into chat-completions requests, send them
    over HTTP and decode the server-sent-event stream back into normalized
    events (text deltas, tool-call deltas, completion), honoring
    cancellation throughout.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`ConfigurationError`, :class:`TransportError`
    - Factory: :func:`create`
    - Adapter: :class:`IFlowProvider`
"""

from typing import Any

from .base.errors import (
    ConfigurationError,
    ErrorCode,
    ProviderError,
    TransportError,
)
from .base.factory import ProviderFactory, UnknownProviderError
from .iflow import IFlowProvider

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ProviderError",
    "ErrorCode",
    "ConfigurationError",
    "TransportError",
    "ProviderFactory",
    "IFlowProvider",
    "create",
]


def create(provider_name: str, **kwargs: Any):
    """Instantiate a provider adapter by canonical name.

    Raises:
        ProviderError: When the provider is unknown or fails to initialize.
    """
    try:
        return ProviderFactory.create(provider_name, **kwargs)
    except UnknownProviderError as e:
        raise ProviderError(
            code=ErrorCode.CONFIGURATION,
            message=str(e),
            provider=provider_name,
        ) from e
