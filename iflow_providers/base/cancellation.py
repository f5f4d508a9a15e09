"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs shared by the transport, the push-source
pump and the stream adapter via the canonical
``iflow_providers.base.cancellation`` import path. Implementations live under
``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is checked at every suspension point of a request:
	awaiting response headers, awaiting each transport chunk, the push-source
	queue wait, and before each emitted event.
- ``CancelledError`` is raised by operations that observe a cancellation
	request. It is not a failure; the stream adapter turns it into an early,
	silent end of the event sequence.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
