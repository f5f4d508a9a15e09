"""Fixtures for stream adapter tests.

Provides push-style source doubles (threaded and synchronous) and a
cancellation token.
"""
from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Optional, Sequence

import pytest

from iflow_providers.base.cancellation import CancellationToken


class FakePushSource:
    """Emitter double: ``on(event, cb)`` plus ``close()``.

    Once a ``data`` listener is attached, ``chunks`` are delivered (on a
    worker thread unless ``synchronous``), then ``error`` when ``fail_with``
    is set, else ``end``. ``hold_after`` pauses delivery after that many
    chunks until ``release`` is set.
    """

    def __init__(
        self,
        chunks: Sequence[Any],
        *,
        fail_with: Any = None,
        synchronous: bool = False,
        hold_after: Optional[int] = None,
    ) -> None:
        self.chunks = list(chunks)
        self.fail_with = fail_with
        self.synchronous = synchronous
        self.hold_after = hold_after
        self.release = threading.Event()
        self.listeners: Dict[str, List[Callable[..., None]]] = {"data": [], "end": [], "error": []}
        self.subscribe_order: List[str] = []
        self.closed = False
        self.thread: Optional[threading.Thread] = None

    def on(self, event: str, callback: Callable[..., None]) -> "FakePushSource":
        self.listeners[event].append(callback)
        self.subscribe_order.append(event)
        if event == "data":
            if self.synchronous:
                self._deliver()
            else:
                self.thread = threading.Thread(target=self._deliver, daemon=True)
                self.thread.start()
        return self

    def _emit(self, event: str, *args: Any) -> None:
        for cb in list(self.listeners[event]):
            cb(*args)

    def _deliver(self) -> None:
        for i, chunk in enumerate(self.chunks):
            if self.hold_after is not None and i == self.hold_after:
                self.release.wait(5.0)
            if self.closed:
                return
            self._emit("data", chunk)
        if self.closed:
            return
        if self.fail_with is not None:
            self._emit("error", self.fail_with)
        else:
            self._emit("end")

    def close(self) -> None:
        self.closed = True
        self.release.set()


@pytest.fixture()
def push_source():
    return FakePushSource


@pytest.fixture()
def token() -> CancellationToken:
    return CancellationToken()
