from __future__ import annotations

from iflow_providers.base.timeouts import TimeoutConfig, get_timeout_config


def test_defaults():
    cfg = get_timeout_config()
    assert cfg == TimeoutConfig()  # nosec B101
    assert cfg.request_timeout_seconds == 60.0 and cfg.stream_poll_interval_seconds == 0.01  # nosec B101


def test_env_overrides_refresh_cache(monkeypatch):
    first = get_timeout_config()
    assert get_timeout_config() is first  # nosec B101

    monkeypatch.setenv("PT_TIMEOUT_REQUEST_SECONDS", "5")
    monkeypatch.setenv("PT_STREAM_READ_CHUNK_BYTES", "1024")
    cfg = get_timeout_config()
    assert cfg.request_timeout_seconds == 5.0 and cfg.read_chunk_bytes == 1024  # nosec B101


def test_invalid_overrides_fall_back(monkeypatch):
    monkeypatch.setenv("PT_TIMEOUT_REQUEST_SECONDS", "-1")
    monkeypatch.setenv("PT_STREAM_POLL_SECONDS", "fast")
    cfg = get_timeout_config()
    assert cfg.request_timeout_seconds == 60.0 and cfg.stream_poll_interval_seconds == 0.01  # nosec B101
