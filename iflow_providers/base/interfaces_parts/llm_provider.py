"""LLMProvider Protocol (single-class module).

Defines the streaming chat contract exposed to host chat subsystems.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence, runtime_checkable

from ..cancellation import CancellationToken
from ..models import Message
from ..streaming.stream_controller import ChatResponseStream


@runtime_checkable
class LLMProvider(Protocol):
    """Minimal interface for streaming chat providers.

    Implementations translate host messages to their wire schema, send one
    request per call and return the lazily decoded event sequence together
    with its completion signal.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g., ``"iflow"``."""
        ...

    def send_chat_request(
        self,
        model_id: Optional[str],
        caller: Optional[str],
        messages: Sequence[Message],
        options: Optional[Mapping[str, Any]] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ChatResponseStream:
        """Start a streaming chat completion.

        Raises ``ConfigurationError`` before any network call when no
        credential is available and ``TransportError`` when the request
        fails before streaming starts.
        """
        ...
