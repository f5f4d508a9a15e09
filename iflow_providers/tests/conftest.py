"""Pytest configuration for the iflow_providers test suite.

Shared fixtures:
- an autouse fixture isolating every test from ``IFLOW_*`` / ``PT_*``
  environment variables and the cached external config file;
- ``providers_log``: structured events captured from the ``providers``
  logger (which does not propagate to root);
- ``sse_body``: builds an SSE body from chunk payloads;
- ``fake_transport``: a ``Transport`` double recording sent requests.

A session finalizer closes pooled HTTP clients.
"""

from __future__ import annotations

import json
import logging
from contextlib import suppress
from typing import Any, Dict, Iterator, List, Mapping, Optional

import pytest

from iflow_providers.base.http import RawResponse, close_all_clients
from iflow_providers.base.logging import get_logger
from iflow_providers.config import reset_config_cache

_ISOLATED_ENV = (
    "IFLOW_API_KEY",
    "IFLOW_TOKEN",
    "IFLOW_MODEL",
    "IFLOW_BASE_URL",
    "IFLOW_MAX_TOKENS",
    "IFLOW_TIMEOUT_SECONDS",
    "PROVIDERS_CONFIG_FILE",
    "PROVIDERS_LOG_LEVEL",
    "PT_TIMEOUT_REQUEST_SECONDS",
    "PT_STREAM_POLL_SECONDS",
    "PT_STREAM_READ_CHUNK_BYTES",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start each test without provider env vars or a cached config file."""
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


class _EventCollector(logging.Handler):
    """Capture structured log events (JSON payloads) for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    @property
    def events(self) -> List[Dict[str, Any]]:
        out = []
        for record in self.records:
            with suppress(ValueError):
                payload = json.loads(record.getMessage())
                if isinstance(payload, dict):
                    out.append(payload)
        return out

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]

    @property
    def text(self) -> str:
        return "\n".join(r.getMessage() for r in self.records)


@pytest.fixture()
def providers_log() -> Iterator[_EventCollector]:
    base = get_logger()
    collector = _EventCollector()
    base.addHandler(collector)
    try:
        yield collector
    finally:
        base.removeHandler(collector)


def build_sse_body(*payloads: Any, done: bool = True) -> str:
    """Join payloads (dicts are JSON-encoded) into ``data:`` frames."""
    frames = []
    for payload in payloads:
        text = payload if isinstance(payload, str) else json.dumps(payload)
        frames.append(f"data: {text}\n\n")
    if done:
        frames.append("data: [DONE]\n\n")
    return "".join(frames)


@pytest.fixture()
def sse_body():
    return build_sse_body


class FakeTransport:
    """Records ``send`` calls and replies with a canned response or error."""

    def __init__(self, response: Optional[RawResponse] = None, error: Optional[BaseException] = None) -> None:
        self.response = response if response is not None else RawResponse(status_code=200, body=b"")
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def send(
        self,
        request_body: Mapping[str, Any],
        *,
        url: str,
        auth_token: str,
        timeout: Optional[float] = None,
        cancel_token=None,
    ) -> RawResponse:
        self.calls.append(
            {
                "body": dict(request_body),
                "url": url,
                "auth_token": auth_token,
                "timeout": timeout,
                "cancel_token": cancel_token,
            }
        )
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture()
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture(scope="session", autouse=True)
def close_clients_after_session() -> Iterator[None]:
    """Close pooled httpx clients once the session ends."""
    yield
    with suppress(Exception):
        close_all_clients()
