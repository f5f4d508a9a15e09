"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of an in-flight chat request. Kept isolated to satisfy one-class-per-file policy.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancellation request.

    Cancellation is not an error condition for callers of the event stream:
    the adapter catches it and simply stops emitting. It only escapes from
    blocking start-phase calls (e.g. while waiting for response headers).
    """

__all__ = ["CancelledError"]
