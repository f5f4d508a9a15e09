"""Unit tests for KeysRepository behavior across store/env fallbacks.

Covers presence/absence, ordering, write-through with change notification,
and lifecycle.
"""

from __future__ import annotations

import pytest

from iflow_providers.base.repositories import (
    EnvSecretStore,
    InMemorySecretStore,
    KeysRepository,
)
from iflow_providers.base.repositories.keys import storage_key


def test_storage_key_slot_name():
    assert storage_key(" IFLOW ") == "iflow.apiKey"  # nosec B101


def test_store_precedence_over_env(monkeypatch):
    # The values below are harmless placeholders; allowlist for secret scanners.
    monkeypatch.setenv("IFLOW_API_KEY", "from-env")  # pragma: allowlist secret - dummy test value
    repo = KeysRepository(InMemorySecretStore({"iflow.apiKey": "from-store"}))  # pragma: allowlist secret
    res = repo.get_resolution("iflow")
    assert res.api_key == "from-store" and res.source == "store"  # nosec B101 - test assertion


def test_env_fallback_and_disable(monkeypatch):
    monkeypatch.setenv("IFLOW_TOKEN", "alias-val")  # pragma: allowlist secret - dummy test value
    res = KeysRepository().get_resolution("iflow")
    assert res.api_key == "alias-val" and res.source == "env"  # nosec B101
    assert res.extra["env_var"] == "IFLOW_TOKEN"  # nosec B101

    assert KeysRepository(env_fallback=False).get_api_key("iflow") is None  # nosec B101


def test_missing_key_returns_none():
    res = KeysRepository().get_resolution("iflow")
    assert res.api_key is None and res.source == "none"  # nosec B101


def test_placeholder_store_value_is_ignored():
    repo = KeysRepository(InMemorySecretStore({"iflow.apiKey": "changeme"}), env_fallback=False)
    assert repo.get_api_key("iflow") is None  # nosec B101


def test_set_api_key_writes_through_and_notifies():
    store = InMemorySecretStore()
    repo = KeysRepository(store, env_fallback=False)
    seen = []

    def failing(_provider: str) -> None:
        raise RuntimeError("listener bug")

    repo.subscribe(failing)
    unsubscribe = repo.subscribe(seen.append)

    repo.set_api_key("iflow", "  sk-first  ")  # pragma: allowlist secret - dummy test value
    assert store.get("iflow.apiKey") == "sk-first"  # nosec B101
    assert repo.get_api_key("iflow") == "sk-first"  # nosec B101

    # cached value is replaced on the next write
    repo.set_api_key("IFLOW", "sk-second")  # pragma: allowlist secret - dummy test value
    assert repo.get_api_key("iflow") == "sk-second"  # nosec B101
    assert seen == ["iflow", "iflow"]  # nosec B101

    unsubscribe()
    repo.set_api_key("iflow", "")
    assert seen == ["iflow", "iflow"]  # nosec B101
    assert repo.get_api_key("iflow") is None  # nosec B101


def test_invalidate_rereads_store():
    store = InMemorySecretStore({"iflow.apiKey": "sk-one"})  # pragma: allowlist secret
    repo = KeysRepository(store)
    assert repo.get_api_key("iflow") == "sk-one"  # nosec B101
    store.set("iflow.apiKey", "sk-two")
    assert repo.get_api_key("iflow") == "sk-one"  # nosec B101
    repo.invalidate("iflow")
    assert repo.get_api_key("iflow") == "sk-two"  # nosec B101


def test_close_rejects_writes():
    repo = KeysRepository()
    repo.close()
    assert repo.closed  # nosec B101
    with pytest.raises(RuntimeError):
        repo.set_api_key("iflow", "sk-late")  # pragma: allowlist secret


def test_env_secret_store_shadows_environment(monkeypatch):
    monkeypatch.setenv("IFLOW_API_KEY", "env-value")  # pragma: allowlist secret - dummy test value
    store = EnvSecretStore()
    assert store.get("iflow.apiKey") == "env-value"  # nosec B101
    store.set("iflow.apiKey", "runtime-value")
    assert store.get("iflow.apiKey") == "runtime-value"  # nosec B101
