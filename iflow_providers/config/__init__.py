"""Unified configuration layer for providers.

Goals
-----
* Centralize defaults (model, base URL, output ceiling, timeout).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``PROVIDERS_CONFIG_FILE``
    3. Environment variables (``IFLOW_MODEL``, ``IFLOW_BASE_URL``,
       ``IFLOW_MAX_TOKENS``, ``IFLOW_TIMEOUT_SECONDS``)
    4. In-code overrides passed to ``get_provider_config``
* Credentials are not part of this merge: they come from the injected
  ``KeysRepository`` so the API key is never cached in a process-wide dict.

External Config File (Optional)
-------------------------------
```
iflow:
  model: qwen3-max
  base_url: https://apis.iflow.cn/v1
  max_tokens: 16384
```

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_model(provider: str) -> str | None
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

from .defaults import (
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    IFLOW_DEFAULT_BASE_URL,
    IFLOW_DEFAULT_MAX_OUTPUT_TOKENS,
    IFLOW_DEFAULT_MODEL,
)


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "iflow": {
        "model": IFLOW_DEFAULT_MODEL,
        "base_url": IFLOW_DEFAULT_BASE_URL,
        "max_tokens": IFLOW_DEFAULT_MAX_OUTPUT_TOKENS,
        "timeout_seconds": DEFAULT_REQUEST_TIMEOUT_SECONDS,
    },
}

# field -> (env suffix, coercion)
ENV_FIELD_MAP: Dict[str, tuple[str, Callable[[str], Any]]] = {
    "model": ("MODEL", str),
    "base_url": ("BASE_URL", str),
    "max_tokens": ("MAX_TOKENS", int),
    "timeout_seconds": ("TIMEOUT_SECONDS", float),
}


_FILE_CACHE: Optional[Dict[str, Any]] = None


def reset_config_cache() -> None:
    """Forget the parsed external config file (tests, config reloads)."""
    global _FILE_CACHE  # noqa: PLW0603 - documented module cache
    _FILE_CACHE = None


def _load_external_config() -> Dict[str, Any]:
    """Parse ``PROVIDERS_CONFIG_FILE`` once (JSON first, then YAML)."""
    global _FILE_CACHE  # noqa: PLW0603 - documented module cache
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def _env_overrides(provider: str) -> Dict[str, Any]:
    """Collect ``<PROVIDER>_<FIELD>`` env values; unparsable numbers are ignored."""
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, (suffix, coerce) in ENV_FIELD_MAP.items():
        raw = os.getenv(f"{prefix}_{suffix}")
        if raw is None or not raw.strip():
            continue
        try:
            out[field] = coerce(raw.strip())
        except ValueError:
            continue
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))
    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg
    cfg |= _env_overrides(name)
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "get_provider_config",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
]
