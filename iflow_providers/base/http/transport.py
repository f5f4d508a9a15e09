"""Transport client for streaming chat-completion requests.

Purpose
-------
Issue exactly one ``POST`` with a JSON body and a bearer token, wait (bounded
by ``timeout``) for the response headers, and hand back a ``RawResponse``
whose body is a push-style ``ResponseEventSource``. Ownership of the body
passes to the caller, normally the stream adapter.

Failure Modes
-------------
- Non-200 status: up to ``MAX_ERROR_BODY_BYTES`` of the error body are
  awaited for at most another ``timeout`` (``body`` is empty if it stalls)
  and ``TransportError`` is raised with ``status`` and ``body``; the code
  follows the status map (401 -> ``auth``, 429 -> ``rate_limit``, ...).
- Network failure: ``TransportError`` classified from the ``httpx``
  exception (``transient`` or ``timeout``), ``status`` is ``None``.
- No headers within ``timeout``: ``TransportError`` with code ``timeout``.
- Cancellation while waiting for headers: ``CancelledError``.

No retries happen here; retry policy belongs to the caller.

Timeouts
--------
Only the header wait and the error-body wait are bounded. Once headers of a
200 response are in, body reads are unbounded and a stalled stream ends
only through cancellation.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..errors import ErrorCode, TransportError, classify_exception, code_for_status
from ..logging import LogContext, get_logger, log_event
from ..timeouts import get_timeout_config
from .client import build_timeout, get_httpx_client
from .response_source import ResponseEventSource

_ERROR_BODY_PREVIEW = 500


@dataclass
class RawResponse:
    """Status, headers and the not-yet-consumed body of a response.

    ``body`` is one of the three shapes the stream adapter understands: a
    push source (``on``), a pull reader (``read``) or an in-memory value.
    """

    status_code: int
    body: Any
    headers: Dict[str, str] = field(default_factory=dict)


@runtime_checkable
class Transport(Protocol):
    def send(
        self,
        request_body: Mapping[str, Any],
        *,
        url: str,
        auth_token: str,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> RawResponse: ...


def build_headers(auth_token: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {auth_token}",
        "Content-Type": "application/json",
        "Accept": "text/event-stream",
    }


class HttpxTransport:
    """``Transport`` implementation backed by a (pooled) ``httpx.Client``."""

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        *,
        provider: str = "unknown",
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._client = client
        self.provider = provider
        self.ctx = ctx
        self._logger = logger or get_logger("providers.transport")

    @property
    def client(self) -> httpx.Client:
        return self._client if self._client is not None else get_httpx_client(None, "stream")

    def send(
        self,
        request_body: Mapping[str, Any],
        *,
        url: str,
        auth_token: str,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> RawResponse:
        """Send the request and return once response headers are available."""
        timeout = timeout if timeout is not None else get_timeout_config().request_timeout_seconds
        model = request_body.get("model") if isinstance(request_body, Mapping) else None
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        source = ResponseEventSource(
            self.client,
            url=url,
            headers=build_headers(auth_token),
            json_body=dict(request_body),
            timeout=build_timeout(timeout),
        ).start()
        unregister = cancel_token.on_cancel(source.close) if cancel_token is not None else None
        try:
            self._await_headers(source, timeout, cancel_token, model)
            status = source.status_code
            if status != 200:
                body = self._await_error_body(source, timeout, cancel_token)
                raise self._fail(
                    TransportError(
                        code=code_for_status(status),
                        message=f"HTTP {status}: {body[:_ERROR_BODY_PREVIEW]}".rstrip(": "),
                        provider=self.provider,
                        model=model,
                        status=status,
                        body=body,
                    )
                )
        except BaseException:
            if unregister is not None:
                unregister()
            source.close()
            raise
        response = source.response
        headers = dict(response.headers) if response is not None else {}
        log_event(self._logger, "transport.response", self.ctx, status=status, url=url)
        return RawResponse(status_code=status, body=source, headers=headers)

    def _await_headers(
        self,
        source: ResponseEventSource,
        timeout: float,
        cancel_token: Optional[CancellationToken],
        model: Optional[str],
    ) -> None:
        """Wait for headers in short slices so cancellation is observed promptly."""
        slice_seconds = get_timeout_config().stream_poll_interval_seconds
        deadline = time.monotonic() + timeout
        while not source.headers_ready.is_set():
            if cancel_token is not None and cancel_token.cancelled:
                raise CancelledError(cancel_token.reason or "operation cancelled")
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise self._fail(
                    TransportError(
                        code=ErrorCode.TIMEOUT,
                        message=f"no response within {timeout:g}s",
                        provider=self.provider,
                        model=model,
                        retryable=True,
                    )
                )
            source.headers_ready.wait(min(remaining, slice_seconds))
        if cancel_token is not None and cancel_token.cancelled:
            raise CancelledError(cancel_token.reason or "operation cancelled")
        if source.request_error is not None:
            exc = source.request_error
            code = classify_exception(exc)
            raise self._fail(
                TransportError(
                    code=code if code is not ErrorCode.UNKNOWN else ErrorCode.TRANSIENT,
                    message=str(exc) or exc.__class__.__name__,
                    provider=self.provider,
                    model=model,
                    retryable=code in (ErrorCode.TRANSIENT, ErrorCode.TIMEOUT),
                    raw=exc,
                )
            )

    def _await_error_body(
        self,
        source: ResponseEventSource,
        timeout: float,
        cancel_token: Optional[CancellationToken],
    ) -> str:
        """Wait for the captured error body; ``""`` when it does not arrive within ``timeout``."""
        slice_seconds = get_timeout_config().stream_poll_interval_seconds
        deadline = time.monotonic() + timeout
        while not source.error_body_ready.is_set():
            if cancel_token is not None and cancel_token.cancelled:
                raise CancelledError(cancel_token.reason or "operation cancelled")
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return ""
            source.error_body_ready.wait(min(remaining, slice_seconds))
        return source.read_error_body()

    def _fail(self, err: TransportError) -> TransportError:
        log_event(
            self._logger,
            "transport.error",
            self.ctx,
            level=logging.WARNING,
            error_code=err.code.value,
            status=err.status,
            error=err.message[:260],
        )
        return err


__all__ = ["RawResponse", "Transport", "HttpxTransport", "build_headers"]
