"""iFlow provider adapter.

Purpose:
    Streams chat completions from the iFlow OpenAI-compatible API
    (``POST https://apis.iflow.cn/v1/chat/completions``) and exposes them to
    host chat subsystems as a lazy sequence of normalized events.

External dependencies:
    - HTTP via ``httpx`` (``base.http.HttpxTransport``); no vendor SDK.

Request lifecycle:
    1. Snapshot the API key (``ConfigurationError`` when missing, before
       any network call).
    2. Validate options with ``ChatOptions`` and build the request body with
       the message translator.
    3. Send through the transport; a non-200 status raises
       ``TransportError`` before any event is produced.
    4. Return a ``ChatResponseStream`` wrapping ``StreamAdapter``; events
       are decoded as the consumer iterates.

Timeout strategy:
    - Only the wait for response headers is bounded (``timeout_seconds``
      from provider config, 60 s by default). Streams are ended early only
      through the cancellation token.

Credentials:
    - Resolved through an injected ``KeysRepository``; keys are never
      logged. ``set_api_key`` persists a new key and notifies listeners
      registered with ``on_did_change``.
"""

from __future__ import annotations

import logging
from contextlib import suppress
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from ..base.cancellation import CancellationToken, CancelledError
from ..base.constants import CHAT_COMPLETIONS_PATH
from ..base.errors import ConfigurationError
from ..base.http import HttpxTransport, Transport
from ..base.interfaces import HasDefaultModel, LLMProvider, ModelListingProvider, TokenEstimator
from ..base.logging import get_logger, log_event, normalized_log_event
from ..base.models import Message, ModelInfo
from ..base.repositories import EnvSecretStore, KeysRepository
from ..base.streaming import ChatResponseStream, StreamAdapter, StreamController
from ..base.tokens import estimate_tokens
from ..base.translation import build_request_body
from ..config import get_provider_config
from ..config.defaults import (
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    IFLOW_DEFAULT_BASE_URL,
    IFLOW_DEFAULT_MAX_OUTPUT_TOKENS,
    IFLOW_DEFAULT_MODEL,
    IFLOW_PROVIDER_NAME,
)
from .helpers import (
    build_completion_request,
    build_model_info,
    coerce_options,
    new_log_context,
    resolve_wire_model,
)


def _coerce_non_empty_str(candidate: Any, fallback: str) -> str:
    """Return ``candidate`` stripped, or ``fallback`` when missing or empty."""
    if candidate is None:
        return fallback
    stripped = str(candidate).strip()
    return stripped or fallback


def _coerce_positive(candidate: Any, fallback, cast):
    try:
        value = cast(candidate)
    except (TypeError, ValueError):
        return fallback
    return value if value > 0 else fallback


class IFlowProvider(LLMProvider, ModelListingProvider, HasDefaultModel, TokenEstimator):
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        max_tokens: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
        keys: Optional[KeysRepository] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        """Initialize the provider from layered configuration.

        Parameters
        ----------
        api_key:
            Explicit credential. Takes precedence over the key repository
            until ``set_api_key`` is called.
        model, base_url, max_tokens, timeout_seconds:
            Overrides for the ``iflow`` provider configuration (defaults,
            ``PROVIDERS_CONFIG_FILE``, ``IFLOW_*`` environment variables).
            ``max_tokens`` is the output ceiling sent when a request does not
            choose its own.
        keys:
            Credential repository. Defaults to one backed by the environment
            (``IFLOW_API_KEY``); owned by the caller when injected.
        transport:
            HTTP transport; defaults to ``HttpxTransport`` on the shared pool.
        """
        cfg = get_provider_config(
            IFLOW_PROVIDER_NAME,
            overrides={
                "model": model,
                "base_url": base_url,
                "max_tokens": max_tokens,
                "timeout_seconds": timeout_seconds,
            },
        )
        self._model = _coerce_non_empty_str(cfg.get("model"), IFLOW_DEFAULT_MODEL)
        self._base_url = _coerce_non_empty_str(cfg.get("base_url"), IFLOW_DEFAULT_BASE_URL).rstrip("/")
        self._max_tokens = _coerce_positive(cfg.get("max_tokens"), IFLOW_DEFAULT_MAX_OUTPUT_TOKENS, int)
        self._timeout = _coerce_positive(cfg.get("timeout_seconds"), DEFAULT_REQUEST_TIMEOUT_SECONDS, float)
        self._api_key_override = api_key.strip() if api_key and api_key.strip() else None
        self._owns_keys = keys is None
        self._keys = keys if keys is not None else KeysRepository(EnvSecretStore())
        self._logger = get_logger("providers.iflow")
        self._transport: Transport = transport or HttpxTransport(provider=IFLOW_PROVIDER_NAME, logger=self._logger)
        self._listeners: List[Callable[[], None]] = []
        self._unsubscribe_keys = self._keys.subscribe(self._on_keys_changed)

    # ------------------------------------------------------------ identity
    @property
    def provider_name(self) -> str:
        """Return the stable provider identifier string."""
        return IFLOW_PROVIDER_NAME

    def default_model(self) -> Optional[str]:
        return self._model

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}{CHAT_COMPLETIONS_PATH}"

    @property
    def max_output_tokens(self) -> int:
        return self._max_tokens

    # --------------------------------------------------------- credentials
    def _resolve_api_key(self) -> Optional[str]:
        if self._api_key_override:
            return self._api_key_override
        return self._keys.get_api_key(IFLOW_PROVIDER_NAME)

    def has_api_key(self) -> bool:
        return bool(self._resolve_api_key())

    def set_api_key(self, api_key: str) -> None:
        """Persist a new key through the repository and notify listeners."""
        self._api_key_override = None
        self._keys.set_api_key(IFLOW_PROVIDER_NAME, api_key)

    def on_did_change(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a listener fired when the credential (and model list) changes."""
        self._listeners.append(listener)

        def _remove() -> None:
            with suppress(ValueError):
                self._listeners.remove(listener)

        return _remove

    def _on_keys_changed(self, provider: str) -> None:
        if provider != IFLOW_PROVIDER_NAME:
            return
        log_event(self._logger, "credentials.changed", provider=provider, configured=self.has_api_key())
        for listener in list(self._listeners):
            with suppress(Exception):
                listener()

    def close(self) -> None:
        """Detach from the key repository (closing it when owned)."""
        self._unsubscribe_keys()
        self._listeners.clear()
        if self._owns_keys:
            self._keys.close()

    # -------------------------------------------------------------- models
    def list_models(self) -> List[ModelInfo]:
        """Return the advertised model, or ``[]`` when no credential is configured."""
        models = [build_model_info(self._model, self._max_tokens)] if self.has_api_key() else []
        log_event(self._logger, "models.list", provider=self.provider_name, count=len(models))
        return models

    def estimate_tokens(self, value: Union[str, Message]) -> int:
        """Approximate token count: characters of text parts divided by 4, rounded up."""
        return estimate_tokens(value)

    # ---------------------------------------------------------------- chat
    def send_chat_request(
        self,
        model_id: Optional[str],
        caller: Optional[str],
        messages: Sequence[Message],
        options: Optional[Mapping[str, Any]] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ChatResponseStream:
        """Start a streaming chat completion.

        Returns:
            ``ChatResponseStream`` whose ``events`` yield ``TextDelta`` /
            ``ToolCallDelta`` and a final ``StreamDone``; ``completion``
            resolves once the events are drained, cancelled or failed.

        Raises:
            ConfigurationError: No API key (raised before any network call).
            pydantic.ValidationError: Invalid options.
            TransportError: Non-200 status, network failure or no response
                headers within the configured timeout.
        """
        token = cancel_token or CancellationToken()
        api_key = self._resolve_api_key()
        if not api_key:
            err = ConfigurationError(
                message="iFlow API key not configured",
                provider=self.provider_name,
                model=model_id,
            )
            log_event(
                self._logger,
                "chat.configuration_error",
                level=logging.ERROR,
                error_code=err.code.value,
                caller=caller,
            )
            raise err

        opts = coerce_options(options)
        model = resolve_wire_model(model_id, opts, self._model)
        request = build_completion_request(
            model=model,
            messages=messages,
            options=opts,
            default_max_tokens=self._max_tokens,
        )
        body = build_request_body(request)
        ctx = new_log_context(model, caller)
        normalized_log_event(
            self._logger,
            "chat.request",
            ctx,
            phase="start",
            attempt=1,
            emitted=False,
            tokens=None,
            messages=len(request.messages),
            tools=len(request.tools),
            max_tokens=request.max_tokens,
            temperature_included=request.temperature is not None,
        )

        try:
            raw = self._transport.send(
                body,
                url=self.endpoint,
                auth_token=api_key,
                timeout=self._timeout,
                cancel_token=token,
            )
            response_body: Any = raw.body
        except CancelledError:
            # cancelled before headers: the event sequence is simply empty
            response_body = None

        adapter = StreamAdapter(
            response_body,
            provider_name=self.provider_name,
            model=model,
            ctx=ctx,
            logger=self._logger,
            cancellation_token=token,
        )
        return ChatResponseStream(StreamController(adapter, token))


__all__ = ["IFlowProvider"]
