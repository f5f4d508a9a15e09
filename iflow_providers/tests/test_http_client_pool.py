"""Unit tests for shared httpx client pool.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose yields different instances.
- A closed pooled client is replaced.
- Timeouts bound everything except body reads.
"""
from __future__ import annotations

from iflow_providers.base.http import build_timeout, close_all_clients, get_httpx_client


def setup_function(_):
    # Ensure a clean slate for each test
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://apis.iflow.cn/v1", purpose="stream")
    c2 = get_httpx_client("https://apis.iflow.cn/v1", purpose="stream")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"  # nosec B101


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client(None, purpose="chat")
    c2 = get_httpx_client(None, purpose="stream")
    assert c1 is not c2, "Different purposes should not share the same client instance"  # nosec B101


def test_closed_client_is_recreated():
    c1 = get_httpx_client(None, purpose="stream")
    c1.close()
    c2 = get_httpx_client(None, purpose="stream")
    assert c2 is not c1 and not c2.is_closed  # nosec B101


def test_build_timeout_leaves_reads_unbounded():
    timeout = build_timeout(5.0)
    assert timeout.connect == 5.0 and timeout.write == 5.0 and timeout.pool == 5.0  # nosec B101
    assert timeout.read is None  # nosec B101
