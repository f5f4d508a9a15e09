"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used to terminate a streaming chat
request early. Consumers poll ``cancelled`` / ``raise_if_cancelled`` between
steps; blocking waits use ``wait`` so they wake up as soon as cancellation is
requested; resources that must be released on cancellation (push-source
subscriptions, open HTTP responses) register an ``on_cancel`` callback.
"""

from __future__ import annotations

from contextlib import suppress
from threading import Event, Lock
from typing import Callable, List

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe: ``cancel`` may be called from any thread (for example a UI
    thread) while the request pipeline runs on another. Child tokens inherit
    cancellation when the parent is cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._event = Event()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation, run callbacks and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
            children = list(self._children)
        self._event.set()
        for callback in callbacks:
            # A failing release hook must not prevent the remaining ones from running.
            with suppress(Exception):
                callback()
        for child in children:
            child.cancel(reason)

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run once on cancellation.

        If the token is already cancelled the callback runs immediately.

        Returns:
            A zero-argument function that unregisters the callback; calling
            it after the callback has fired is a no-op.
        """
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)

                def _unregister() -> None:
                    with self._lock, suppress(ValueError):
                        self._state.callbacks.remove(callback)

                return _unregister
        callback()
        return lambda: None

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def wait(self, timeout: float | None = None) -> bool:
        """Block up to ``timeout`` seconds; return True if cancelled meanwhile."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
