"""Streaming metrics data structures.

Collected by the stream adapter for one request and logged once by
``finalize_stream``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Dict, Any, Tuple


@dataclass
class StreamMetrics:
    """Collected streaming metrics for a single request.

    Attributes:
        emitted: Number of delta events yielded to the consumer.
        time_to_first_event_ms: Latency from adapter start to the first delta.
        total_duration_ms: Latency from adapter start to completion.
        decode_errors: Malformed frames skipped by the interpreter.
        prompt_tokens / completion_tokens / total_tokens: Usage reported by
            the vendor, when present.
        tokens: Canonical usage mapping (``prompt``/``completion``/``total``).
    """

    emitted: int = 0
    time_to_first_event_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    decode_errors: int = 0
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    tokens: Optional[Dict[str, Any]] = None


def apply_token_usage(metrics: StreamMetrics, usage: Optional[Dict[str, Optional[int]]]) -> None:
    """Copy a canonical usage mapping onto ``metrics``."""
    if not usage:
        return
    metrics.prompt_tokens = usage.get("prompt")
    metrics.completion_tokens = usage.get("completion")
    metrics.total_tokens = usage.get("total")
    metrics.tokens = {
        "prompt": metrics.prompt_tokens,
        "completion": metrics.completion_tokens,
        "total": metrics.total_tokens,
    }


def validate_token_usage(
    metrics: StreamMetrics,
    *,
    raise_on_error: bool = False,
) -> Tuple[bool, Optional[str]]:
    """Validate token usage fields for internal consistency."""

    def _fail(reason: str) -> Tuple[bool, Optional[str]]:
        if raise_on_error:
            raise ValueError(f"token usage invalid: {reason}")
        return False, reason

    for name, value in (
        ("prompt_tokens", metrics.prompt_tokens),
        ("completion_tokens", metrics.completion_tokens),
        ("total_tokens", metrics.total_tokens),
    ):
        if value is not None and value < 0:
            return _fail(f"{name} negative: {value}")

    if (
        metrics.prompt_tokens is not None
        and metrics.completion_tokens is not None
        and metrics.total_tokens is not None
    ) and metrics.prompt_tokens + metrics.completion_tokens != metrics.total_tokens:
        return _fail("total_tokens mismatch: expected prompt+completion == total")

    return True, None


__all__ = [
    "StreamMetrics",
    "apply_token_usage",
    "validate_token_usage",
]
