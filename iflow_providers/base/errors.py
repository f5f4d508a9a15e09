"""Provider error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``iflow_providers.base.errors_parts`` to keep a stable import path.

Taxonomy
--------
- ``ConfigurationError``: no credential available; raised before any network
  call and never retried.
- ``TransportError``: non-2xx status, network failure or timeout; terminal
  for the current request and carries ``status`` / ``body`` when known.
- ``DecodeError``: malformed stream frame; recoverable, recorded by the chunk
  interpreter and never raised out of the event stream.
- ``CancelledError`` (see ``base.cancellation``): not a failure.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.configuration_error import ConfigurationError
from .errors_parts.transport_error import TransportError
from .errors_parts.decode_error import DecodeError
from .errors_parts.classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
    "classify_exception",
    "code_for_status",
]
