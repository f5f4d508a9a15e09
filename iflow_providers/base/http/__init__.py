"""HTTP utilities package for providers.

Exposes pooled httpx clients, the streaming transport and its push source.
"""

from .client import build_timeout, close_all_clients, get_httpx_client
from .response_source import ResponseEventSource
from .transport import HttpxTransport, RawResponse, Transport, build_headers

__all__ = [
    "build_timeout",
    "close_all_clients",
    "get_httpx_client",
    "ResponseEventSource",
    "HttpxTransport",
    "RawResponse",
    "Transport",
    "build_headers",
]
