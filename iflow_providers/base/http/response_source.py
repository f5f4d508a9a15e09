"""Push-style event source over a streaming ``httpx`` response.

Purpose
-------
``ResponseEventSource`` sends one streaming POST on a daemon thread and then
re-publishes the response body as ``data`` / ``end`` / ``error``
notifications to subscribers registered with ``on(event, callback)``. It is
the body the transport hands to the stream adapter, which consumes it as a
push source.

Lifecycle
---------
1. ``start()``: the worker thread sends the request; ``headers_ready`` is
   set once response headers arrived or the request failed.
2. A non-200 response is never pumped: the worker captures at most
   ``MAX_ERROR_BODY_BYTES`` of its body into ``error_body``, sets
   ``error_body_ready`` and closes it. Otherwise the body is not read until
   a ``data`` listener is attached (flowing mode).
3. While flowing, every non-empty chunk from ``iter_bytes()`` is delivered
   to ``data`` listeners, followed by ``end`` or ``error``.
4. ``close()`` stops the pump and closes the response. No notification is
   delivered after ``close()``; a request still waiting for headers is
   closed as soon as they arrive.

Callbacks run on the worker thread and must not block.
"""

from __future__ import annotations

import threading
from contextlib import suppress
from typing import Any, Callable, Dict, List, Mapping, Optional

import httpx

from ..constants import MAX_ERROR_BODY_BYTES, PUSH_EVENT_DATA, PUSH_EVENT_END, PUSH_EVENT_ERROR

Listener = Callable[..., None]


class ResponseEventSource:
    """Emitter-style wrapper around one streamed HTTP exchange."""

    def __init__(
        self,
        client: httpx.Client,
        *,
        method: str = "POST",
        url: str,
        headers: Mapping[str, str],
        json_body: Any,
        timeout: httpx.Timeout,
    ) -> None:
        self._client = client
        self._method = method
        self._url = url
        self._headers = dict(headers)
        self._json_body = json_body
        self._timeout = timeout
        self._listeners: Dict[str, List[Listener]] = {
            PUSH_EVENT_DATA: [],
            PUSH_EVENT_END: [],
            PUSH_EVENT_ERROR: [],
        }
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._response: Optional[httpx.Response] = None
        self.headers_ready = threading.Event()
        self._flowing = threading.Event()
        self._closed = False
        self.request_error: Optional[Exception] = None
        self.error_body = ""
        self.error_body_ready = threading.Event()

    # ------------------------------------------------------------- lifecycle
    def start(self) -> "ResponseEventSource":
        self._thread = threading.Thread(target=self._run, name="providers-response-pump", daemon=True)
        self._thread.start()
        return self

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def response(self) -> Optional[httpx.Response]:
        return self._response

    @property
    def status_code(self) -> Optional[int]:
        return self._response.status_code if self._response is not None else None

    def on(self, event: str, callback: Listener) -> "ResponseEventSource":
        """Subscribe to ``data``, ``end`` or ``error``; a data listener starts the flow."""
        if event not in self._listeners:
            raise ValueError(f"unknown event: {event}")
        with self._lock:
            self._listeners[event].append(callback)
        if event == PUSH_EVENT_DATA:
            self._flowing.set()
        return self

    def read_error_body(self, timeout: Optional[float] = None) -> str:
        """Return the captured error body, waiting up to ``timeout`` seconds; ``""`` if none arrived."""
        if not self.error_body_ready.wait(timeout if timeout is not None else 0.0):
            return ""
        return self.error_body

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            response = self._response
            for listeners in self._listeners.values():
                listeners.clear()
        self._flowing.set()
        if response is not None:
            with suppress(Exception):
                response.close()

    # ---------------------------------------------------------------- worker
    def _run(self) -> None:
        try:
            request = self._client.build_request(
                self._method,
                self._url,
                json=self._json_body,
                headers=self._headers,
                timeout=self._timeout,
            )
            response = self._client.send(request, stream=True)
        except Exception as exc:  # surfaced by the transport as TransportError
            self.request_error = exc
            self.headers_ready.set()
            return
        with self._lock:
            closed = self._closed
            if not closed:
                self._response = response
        if closed:
            with suppress(Exception):
                response.close()
            self.headers_ready.set()
            return
        self.headers_ready.set()
        if response.status_code != 200:
            self._capture_error_body(response)
            return
        self._flowing.wait()
        self._pump(response)

    def _capture_error_body(self, response: httpx.Response) -> None:
        chunks: List[bytes] = []
        size = 0
        try:
            for chunk in response.iter_bytes():
                if self._closed:
                    break
                chunks.append(chunk)
                size += len(chunk)
                if size >= MAX_ERROR_BODY_BYTES:
                    break
        except (httpx.HTTPError, httpx.StreamError) as exc:
            # a broken error body still reports whatever arrived
            self.request_error = exc
        finally:
            with suppress(Exception):
                response.close()
        self.error_body = b"".join(chunks)[:MAX_ERROR_BODY_BYTES].decode("utf-8", errors="replace")
        self.error_body_ready.set()

    def _pump(self, response: httpx.Response) -> None:
        try:
            for chunk in response.iter_bytes():
                if self._closed:
                    return
                if chunk:
                    self._emit(PUSH_EVENT_DATA, chunk)
        except Exception as exc:
            if not self._closed:
                self._emit(PUSH_EVENT_ERROR, exc)
            return
        finally:
            with suppress(Exception):
                response.close()
        if not self._closed:
            self._emit(PUSH_EVENT_END)

    def _emit(self, event: str, *args: Any) -> None:
        with self._lock:
            listeners = list(self._listeners[event])
        for listener in listeners:
            listener(*args)


__all__ = ["ResponseEventSource"]
