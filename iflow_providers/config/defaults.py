"""iflow_providers.config.defaults
==============================

Central place for the stable default values used across the package. Each
can be overridden through environment variables or an external config file
(see ``iflow_providers.config``), but these are the fallbacks for local
development and tests.

This module intentionally imports nothing from the rest of the package so
it can be used from any layer without import cycles.
"""

from __future__ import annotations

# ---- Transport ----
# Bound on connect + upload + waiting for response headers (seconds).
DEFAULT_REQUEST_TIMEOUT_SECONDS = 60.0
# Push-source consumer wait slice while its frame queue is empty (seconds).
DEFAULT_STREAM_POLL_SECONDS = 0.01
# Read size hint for pull-style sources (bytes).
DEFAULT_READ_CHUNK_BYTES = 65536

# ---- iFlow vendor defaults ----
IFLOW_PROVIDER_NAME = "iflow"
IFLOW_VENDOR = "iFlow"
IFLOW_DEFAULT_BASE_URL = "https://apis.iflow.cn/v1"
IFLOW_DEFAULT_MODEL = "qwen3-max"
IFLOW_MODEL_FAMILY = "TBStars"
# Secret store key under which the API key is persisted.
IFLOW_API_KEY_STORAGE_KEY = "iflow.apiKey"  # pragma: allowlist secret - storage slot name, not a secret
# Output ceiling sent when the caller does not choose one.
IFLOW_DEFAULT_MAX_OUTPUT_TOKENS = 32768
IFLOW_MAX_INPUT_TOKENS = 200000

# ---- Token estimation ----
# Coarse heuristic: one token per this many characters (rounded up).
CHARS_PER_TOKEN_ESTIMATE = 4


__all__ = [
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "DEFAULT_STREAM_POLL_SECONDS",
    "DEFAULT_READ_CHUNK_BYTES",
    "IFLOW_PROVIDER_NAME",
    "IFLOW_VENDOR",
    "IFLOW_DEFAULT_BASE_URL",
    "IFLOW_DEFAULT_MODEL",
    "IFLOW_MODEL_FAMILY",
    "IFLOW_API_KEY_STORAGE_KEY",
    "IFLOW_DEFAULT_MAX_OUTPUT_TOKENS",
    "IFLOW_MAX_INPUT_TOKENS",
    "CHARS_PER_TOKEN_ESTIMATE",
]
