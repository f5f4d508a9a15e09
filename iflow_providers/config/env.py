"""iflow_providers.config.env
=========================

Environment variable mapping and helpers for provider credentials.

Purpose
-------
- Single source of truth mapping provider identifiers to the environment
  variable names that may hold their API key (canonical name first).
- Small lookup helpers used by ``EnvSecretStore`` and the config loader.

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables; they return
``None`` and let the caller decide (the adapter turns a missing key into a
``ConfigurationError``).
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Provider -> ordered env var names (canonical first)
ENV_MAP: Dict[str, Tuple[str, ...]] = {
    "iflow": ("IFLOW_API_KEY", "IFLOW_TOKEN"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder rather than a credential.

    Heuristics (case-insensitive): contains ``placeholder``, ``changeme`` or
    ``example``, or starts with ``test_``.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a provider, canonical first."""
    yield from ENV_MAP.get((provider or "").lower().strip(), ())


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for ``provider`` from the process environment.

    Returns:
        ``(value, env_var_used)`` for the first non-empty, non-placeholder
        candidate, or ``(None, None)``.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and val.strip() and not is_placeholder(val):
            return val.strip(), name
    return None, None


__all__ = [
    "ENV_MAP",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_provider_key",
]
