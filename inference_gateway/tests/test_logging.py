"""Unit coverage for structured logging utilities."""

from __future__ import annotations

import json
import logging

from inference_gateway.base.log_support import JsonFormatter, LogContext
from inference_gateway.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def test_parse_level_variants():
    assert _parse_level(None) == logging.WARNING  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_log_event_drops_none_and_merges_context(log_capture):
    logger = get_logger("inference_gateway.test")
    ctx = LogContext(base_url="http://gw/v1", model="m", extra={"tenant": "t1", "skip": None})
    log_event(logger, "unit.event", ctx, answer=42, nothing=None)

    payload = json.loads(log_capture[-1].getMessage())
    assert payload == {  # nosec B101
        "event": "unit.event",
        "base_url": "http://gw/v1",
        "model": "m",
        "tenant": "t1",
        "answer": 42,
    }


def test_normalized_log_event_emits_required_keys(log_capture):
    logger = get_logger("inference_gateway.test")
    normalized_log_event(
        logger,
        "stream.end",
        LogContext(provider="openai"),
        phase="finalize",
        emitted=True,
        tokens={"prompt": 1, "completion": 2, "total": 3},
        phase_override="ignored",
        extra_field=123,
    )
    payload = json.loads(log_capture[-1].getMessage())
    for key in REQUIRED_NORMALIZED_KEYS:
        if key != "error_code":
            assert key in payload  # nosec B101
    assert "error_code" not in payload  # nosec B101
    assert payload["attempt"] is None and payload["extra_field"] == 123  # nosec B101


def test_log_event_skips_disabled_levels():
    logger = get_logger("inference_gateway.quiet")
    handler = _ListHandler()
    logger.addHandler(handler)
    try:
        log_event(logger, "too.chatty", level=logging.DEBUG)
    finally:
        logger.removeHandler(handler)
    assert handler.messages == []  # nosec B101


def test_json_formatter_hoists_json_message():
    record = logging.LogRecord(
        name="inference_gateway.test.json",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=json.dumps({"event": "stream.open", "status": 200}),
        args=(),
        exc_info=None,
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["event"] == "stream.open" and payload["status"] == 200  # nosec B101
    assert payload["level"] == "INFO" and "msg" not in payload  # nosec B101


def test_configure_logger_attaches_rotating_file(tmp_path):
    log_file = tmp_path / "logs" / "gateway.log"
    logger = configure_logger(level="INFO", file_path=str(log_file))
    try:
        log_event(get_logger("inference_gateway.file"), "file.event", value=1)
        for h in logger.handlers:
            h.flush()
        lines = log_file.read_text(encoding="utf-8").strip().splitlines()
        assert json.loads(lines[-1])["event"] == "file.event"  # nosec B101
    finally:
        configure_logger(level=logging.WARNING, file_path=None)
