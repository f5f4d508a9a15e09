"""Stream adapter helper functions.

Source-shape detection, fallback text coercion, source cleanup and error
normalization used by ``StreamAdapter``. Kept apart so the adapter module
reads as the three consumption loops and nothing else.
"""

from __future__ import annotations

import logging
from contextlib import suppress
from collections.abc import Iterable, Mapping
from typing import Any, Iterator, Literal, Optional, Union

from ..errors import ErrorCode, ProviderError, TransportError, classify_exception
from ..logging import LogContext, log_event

SourceShape = Literal["push", "pull", "fallback"]

_BYTES_LIKE = (bytes, bytearray, memoryview)


def detect_source_shape(body: Any) -> SourceShape:
    """Classify a response body by capability, once per request.

    ``push``: exposes a callable ``on(event, callback)`` subscription.
    ``pull``: exposes a callable ``read(size)``.
    ``fallback``: anything else (in-memory value or unknown shape).
    """
    if callable(getattr(body, "on", None)):
        return "push"
    if callable(getattr(body, "read", None)):
        return "pull"
    return "fallback"


def _has_own_str(value: Any) -> bool:
    return type(value).__str__ is not object.__str__


def coerce_to_text(value: Any) -> Optional[str]:
    """Coerce a single in-memory value to text.

    Preference order: UTF-8 decoding of bytes-like values, the value itself
    when already a string, a textual ``text`` attribute, then ``str()`` but
    only when the type defines its own ``__str__``. Plain objects yield
    ``None`` instead of an ``<object at 0x...>`` placeholder.
    """
    if value is None:
        return ""
    if isinstance(value, _BYTES_LIKE):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, str):
        return value
    text = getattr(value, "text", None)
    if isinstance(text, str):
        return text
    if _has_own_str(value):
        return str(value)
    return None


def fallback_chunks(
    body: Any,
    *,
    logger: logging.Logger,
    ctx: Optional[LogContext] = None,
) -> Iterator[Union[str, bytes]]:
    """Yield body chunks for the fallback path.

    A single value is yielded once. An iterable that is not itself coercible
    (lists or generators of chunks) is walked lazily; bytes items pass
    through untouched so multi-byte characters split across items still
    decode correctly. Values that cannot be coerced are logged and skipped.
    """
    text = coerce_to_text(body)
    if text is not None:
        if text:
            yield text
        return
    if isinstance(body, Iterable) and not isinstance(body, Mapping):
        for item in body:
            if isinstance(item, _BYTES_LIKE):
                yield bytes(item)
                continue
            piece = coerce_to_text(item)
            if piece is None:
                _log_uncoercible(logger, ctx, item)
            elif piece:
                yield piece
        return
    _log_uncoercible(logger, ctx, body)


def _log_uncoercible(logger: logging.Logger, ctx: Optional[LogContext], value: Any) -> None:
    log_event(
        logger,
        "stream.fallback.unsupported_body",
        ctx,
        level=logging.WARNING,
        body_type=type(value).__name__,
    )


def close_source(source: Any) -> None:
    """Best-effort release of a response body (readers, emitters)."""
    close_fn = getattr(source, "close", None)
    if callable(close_fn):
        with suppress(Exception):
            close_fn()


def as_transport_error(exc: BaseException, *, provider: str, model: Optional[str]) -> ProviderError:
    """Normalize a source failure into the error raised to the consumer.

    Provider errors pass through; anything else becomes a ``TransportError``
    classified from the original exception.
    """
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc) if isinstance(exc, Exception) else None
    err = TransportError(
        message=str(exc) or exc.__class__.__name__,
        provider=provider,
        model=model,
        raw=exc if isinstance(exc, Exception) else None,
    )
    if code is not None and code is not ErrorCode.UNKNOWN:
        err.code = code
    return err


__all__ = [
    "SourceShape",
    "detect_source_shape",
    "coerce_to_text",
    "fallback_chunks",
    "close_source",
    "as_transport_error",
]
