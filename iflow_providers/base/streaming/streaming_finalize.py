"""Finalize stream helper.

Single place where the end of an adapter run is logged, so successful,
cancelled and failed runs report the same normalized key set.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics, validate_token_usage

_EVENT_BY_OUTCOME = {
    "end": "stream.adapter.end",
    "cancelled": "stream.adapter.cancelled",
    "error": "stream.adapter.error",
}


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: Optional[LogContext],
    metrics: StreamMetrics,
    outcome: str = "end",
    error_code: Optional[str] = None,
    error: Optional[str] = None,
    finish_reason: Optional[str] = None,
    source_shape: Optional[str] = None,
) -> None:
    """Emit the consolidated end-of-stream log event.

    ``outcome`` is one of ``end``, ``cancelled`` or ``error``. Reported usage
    that is negative or does not add up is flagged with ``usage_issue``.
    """
    usage_issue = None
    if metrics.tokens:
        _, usage_issue = validate_token_usage(metrics)
    normalized_log_event(
        logger,
        _EVENT_BY_OUTCOME.get(outcome, "stream.adapter.end"),
        ctx,
        phase="finalize",
        attempt=None,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        error_code=error_code,
        level=logging.ERROR if outcome == "error" else logging.INFO,
        emitted_count=metrics.emitted,
        decode_errors=metrics.decode_errors,
        time_to_first_event_ms=metrics.time_to_first_event_ms,
        total_duration_ms=metrics.total_duration_ms,
        finish_reason=finish_reason,
        source_shape=source_shape,
        error=error,
        usage_issue=usage_issue,
    )


__all__ = ["finalize_stream"]
