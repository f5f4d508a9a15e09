"""Focused tests for iflow_providers.base.logging.

Covers:
- _parse_level string parsing
- normalized_log_event emits the canonical keys
- log_event merges LogContext and drops None fields
- JsonFormatter hoists structured payloads
- mask_secret never echoes characters
"""
from __future__ import annotations

import json
import logging

from iflow_providers.base.log_support import JsonFormatter, LogContext
from iflow_providers.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    log_event,
    mask_secret,
    normalized_log_event,
)


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_normalized_log_event_emits_required_keys(providers_log):
    logger = get_logger("providers.test.logging")
    ctx = LogContext(provider="iflow", model="qwen3-max", request_id="r1")
    normalized_log_event(
        logger,
        "stream.adapter.error",
        ctx,
        phase="finalize",
        attempt=None,
        error_code="timeout",
        emitted=True,
        tokens={"prompt": 10, "completion": 5},
    )

    payload = providers_log.named("stream.adapter.error")[-1]
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in payload  # nosec B101
    assert payload["error_code"] == "timeout"  # nosec B101
    assert payload["tokens"] == {"prompt": 10, "completion": 5}  # nosec B101
    assert payload["provider"] == "iflow" and payload["request_id"] == "r1"  # nosec B101


def test_normalized_log_event_omits_error_code_on_success(providers_log):
    logger = get_logger("providers.test.logging2")
    normalized_log_event(logger, "stream.adapter.end", None, phase="finalize", emitted=False, tokens=None, extra=None)
    payload = providers_log.named("stream.adapter.end")[-1]
    assert "error_code" not in payload and "extra" not in payload  # nosec B101
    assert payload["tokens"] is None and payload["attempt"] is None  # nosec B101


def test_log_event_drops_none_fields(providers_log):
    logger = get_logger("providers.test.logging3")
    log_event(logger, "models.list", LogContext(provider="iflow"), count=1, missing=None)
    payload = providers_log.named("models.list")[-1]
    assert payload == {"event": "models.list", "provider": "iflow", "count": 1}  # nosec B101


def test_json_formatter_hoists_payload():
    record = logging.LogRecord("providers.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 1}), None, None)
    line = json.loads(JsonFormatter().format(record))
    assert line["event"] == "e" and line["n"] == 1 and line["level"] == "INFO"  # nosec B101
    assert "msg" not in line  # nosec B101


def test_mask_secret():
    assert mask_secret(None) == "<unset>"  # nosec B101
    assert mask_secret("sk-abcdef") == "<redacted:9>"  # nosec B101 # pragma: allowlist secret


def test_configure_logger_file_handler(tmp_path):
    target = tmp_path / "logs" / "providers.log"
    logger = configure_logger(level="DEBUG", file_path=str(target))
    try:
        log_event(get_logger("providers.test.file"), "file.event", value=1)
        for handler in logger.handlers:
            handler.flush()
        assert "file.event" in target.read_text(encoding="utf-8")  # nosec B101
    finally:
        configure_logger(level="INFO", file_path=None)
