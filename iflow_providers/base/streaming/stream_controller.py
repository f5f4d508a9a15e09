"""StreamController: the handle returned to callers of a chat request.

Wraps ``StreamAdapter.run()`` with a cancellation handle and a completion
signal. ``completion`` is a ``concurrent.futures.Future`` that resolves once
the event sequence is finished:

* drained normally: result is the terminal ``StreamDone``;
* cancelled, or abandoned by the consumer: result is ``None``;
* failed: the ``ProviderError`` is set as the future's exception (and also
  raised to the iterating consumer).

The sequence is single-pass; iterating a second time raises ``RuntimeError``.
"""
from __future__ import annotations

from concurrent.futures import Future
from contextlib import suppress
from dataclasses import dataclass
from typing import Iterator, Optional

from ..cancellation import CancellationToken
from ..errors import ProviderError
from .events import NormalizedEvent, StreamDone


class StreamController:
    """Cancellable, single-pass iterator over a stream adapter."""

    def __init__(
        self,
        adapter,  # StreamAdapter; untyped to avoid a circular import
        token: CancellationToken | None = None,
    ) -> None:
        self._adapter = adapter
        self._token = token or CancellationToken()
        if getattr(adapter, "_token", None) is None:
            adapter._token = self._token
        self.completion: "Future[Optional[StreamDone]]" = Future()
        self.completion.set_running_or_notify_cancel()
        self._iterated = False

    def __iter__(self) -> Iterator[NormalizedEvent]:
        if self._iterated:
            raise RuntimeError("event stream can only be consumed once")
        self._iterated = True
        terminal: Optional[StreamDone] = None
        run = self._adapter.run()
        try:
            for evt in run:
                if isinstance(evt, StreamDone):
                    terminal = evt
                yield evt
        except ProviderError as err:
            self._resolve_error(err)
            raise
        finally:
            # abandoned consumers still release the source
            run.close()
            self._resolve(terminal)

    # API -----------------------------------------------------------------
    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation; safe to call repeatedly."""
        self._token.cancel(reason)

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def finished(self) -> bool:  # noqa: D401 - short property
        """Whether the completion signal has resolved."""
        return self.completion.done()

    def _resolve(self, terminal: Optional[StreamDone]) -> None:
        if not self.completion.done():
            # InvalidStateError if a concurrent resolver won the race
            with suppress(Exception):
                self.completion.set_result(terminal)

    def _resolve_error(self, err: ProviderError) -> None:
        if not self.completion.done():
            with suppress(Exception):
                self.completion.set_exception(err)


@dataclass(frozen=True)
class ChatResponseStream:
    """Result of ``send_chat_request``.

    Attributes:
        events: Single-pass iterable of normalized events.
        completion: Resolves when ``events`` is drained, cancelled or failed.
    """

    events: StreamController

    @property
    def completion(self) -> "Future[Optional[StreamDone]]":
        return self.events.completion

    def __iter__(self) -> Iterator[NormalizedEvent]:
        return iter(self.events)

    def cancel(self, reason: str | None = None) -> None:
        self.events.cancel(reason)


__all__ = ["StreamController", "ChatResponseStream"]
