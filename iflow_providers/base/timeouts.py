"""Unified timeout values for the provider layer.

Only one phase of a chat request is time-bounded: the wait for the HTTP
response headers (connection, upload and first response). Once headers
arrive, the body stream is unbounded and a hung stream ends only through
caller cancellation. The push-source consumer additionally uses a short poll
interval so an empty queue never turns into a busy loop.

Key Components
--------------
TimeoutConfig
    Frozen dataclass with the normalized values.

get_timeout_config()
    Returns a cached configuration, re-parsed only when the relevant
    environment variables change. Supported variables (all optional):
        PT_TIMEOUT_REQUEST_SECONDS
        PT_STREAM_POLL_SECONDS
        PT_STREAM_READ_CHUNK_BYTES

Design Constraints
------------------
1. No ad-hoc timeout literals outside this module and ``config.defaults``.
2. Invalid or non-positive overrides fall back to defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from ..config.defaults import (
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_STREAM_POLL_SECONDS,
    DEFAULT_READ_CHUNK_BYTES,
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values.

    Attributes:
        request_timeout_seconds: Bound on connecting, sending the body and
            receiving response headers.
        stream_poll_interval_seconds: Maximum wait of the push-source
            consumer before re-checking cancellation while its queue is empty.
        read_chunk_bytes: Size hint for each ``read()`` on pull-style sources.
    """

    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    stream_poll_interval_seconds: float = DEFAULT_STREAM_POLL_SECONDS
    read_chunk_bytes: int = DEFAULT_READ_CHUNK_BYTES


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None
_ENV_VARS = ("PT_TIMEOUT_REQUEST_SECONDS", "PT_STREAM_POLL_SECONDS", "PT_STREAM_READ_CHUNK_BYTES")


def _parse_env_float(name: str, default: float) -> float:
    """Read a positive float from ``name``; fall back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the cached `TimeoutConfig`, refreshed when env overrides change."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_VARS)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        request_timeout_seconds=_parse_env_float("PT_TIMEOUT_REQUEST_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS),
        stream_poll_interval_seconds=_parse_env_float("PT_STREAM_POLL_SECONDS", DEFAULT_STREAM_POLL_SECONDS),
        read_chunk_bytes=int(_parse_env_float("PT_STREAM_READ_CHUNK_BYTES", DEFAULT_READ_CHUNK_BYTES)),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
