"""
Keys Repository

Purpose
- Resolve provider API keys from an injected secret store, with the process
  environment as a read-only fallback.
- Let callers persist a new key and be notified when it changes.

Design
- The repository is an explicitly constructed object handed to the
  components that need it; there is no module-level instance or background
  re-check. ``close()`` releases cached values and listeners.
- Non-throwing accessors return ``None`` when no key is resolved; turning
  that into a ``ConfigurationError`` is the adapter's decision.
- Values are never logged.

Usage
- repo = KeysRepository(InMemorySecretStore())
- repo.set_api_key("iflow", "sk-...")
- key = repo.get_api_key("iflow")
"""

from __future__ import annotations

import threading
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from ...config.env import is_placeholder, resolve_provider_key

KeyListener = Callable[[str], None]


def storage_key(provider: str) -> str:
    """Secret store slot for a provider's API key (e.g. ``iflow.apiKey``)."""
    return f"{(provider or '').lower().strip()}.apiKey"


@runtime_checkable
class SecretStore(Protocol):
    """Minimal secret storage contract (host keychain, vault, memory...)."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemorySecretStore:
    """Process-local store; handy for tests and short-lived tools."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value


class EnvSecretStore(InMemorySecretStore):
    """Reads ``<PROVIDER>_API_KEY`` style variables; writes stay in memory.

    The environment is never mutated; values set at runtime shadow it.
    """

    def get(self, key: str) -> Optional[str]:
        stored = super().get(key)
        if stored:
            return stored
        provider = key.split(".", 1)[0]
        value, _ = resolve_provider_key(provider)
        return value


@dataclass
class KeyResolution:
    provider: str
    api_key: Optional[str]
    source: str  # "store", "env", "none"
    extra: Dict[str, Any] = field(default_factory=dict)


class KeysRepository:
    """
    Resolve provider credentials with a strict priority order:

    1) The injected secret store
    2) Environment variables (when ``env_fallback`` is enabled)
    3) None
    """

    def __init__(self, store: Optional[SecretStore] = None, *, env_fallback: bool = True) -> None:
        self._store: SecretStore = store if store is not None else InMemorySecretStore()
        self._env_fallback = env_fallback
        self._cache: Dict[str, KeyResolution] = {}
        self._listeners: List[KeyListener] = []
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def get_api_key(self, provider: str) -> Optional[str]:
        return self.get_resolution(provider).api_key

    def get_resolution(self, provider: str) -> KeyResolution:
        p = (provider or "").lower().strip()
        with self._lock:
            cached = self._cache.get(p)
        if cached is not None:
            return cached
        resolution = self._resolve(p)
        if resolution.api_key:
            with self._lock:
                self._cache[p] = resolution
        return resolution

    def _resolve(self, provider: str) -> KeyResolution:
        value = self._store.get(storage_key(provider))
        if value and value.strip() and not is_placeholder(value):
            return KeyResolution(provider=provider, api_key=value.strip(), source="store")
        if self._env_fallback:
            env_value, used = resolve_provider_key(provider)
            if env_value:
                return KeyResolution(provider=provider, api_key=env_value, source="env", extra={"env_var": used})
        return KeyResolution(provider=provider, api_key=None, source="none")

    def set_api_key(self, provider: str, value: str) -> None:
        """Persist ``value`` through the store and notify subscribers.

        An empty value clears the cached key (the store keeps an empty slot).
        """
        if self._closed:
            raise RuntimeError("keys repository is closed")
        p = (provider or "").lower().strip()
        cleaned = (value or "").strip()
        self._store.set(storage_key(p), cleaned)
        with self._lock:
            self._cache.pop(p, None)
            listeners = list(self._listeners)
        for listener in listeners:
            # one failing subscriber must not block the others
            with suppress(Exception):
                listener(p)

    def subscribe(self, listener: KeyListener) -> Callable[[], None]:
        """Register a change listener; returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock, suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    def invalidate(self, provider: Optional[str] = None) -> None:
        """Drop cached resolutions (all providers when ``provider`` is None)."""
        with self._lock:
            if provider is None:
                self._cache.clear()
            else:
                self._cache.pop(provider.lower().strip(), None)

    def close(self) -> None:
        with self._lock:
            self._cache.clear()
            self._listeners.clear()
            self._closed = True


__all__ = [
    "SecretStore",
    "InMemorySecretStore",
    "EnvSecretStore",
    "KeyResolution",
    "KeysRepository",
    "KeyListener",
    "storage_key",
]
