"""Tests for logging formatters and setup."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator

import pytest

from infra.config import clear_settings_cache
from infra.logging_config import (
    JsonFormatter,
    TextFormatter,
    clear_log_context,
    get_log_context,
    set_log_context,
    setup_logging,
)


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_log_context()
    clear_settings_cache()


def _record(msg: str = "hello %s", *args: object, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("streamnotes.test", logging.INFO, __file__, 10, msg, args or ("world",), None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_json_formatter_emits_valid_json_with_extras_and_context() -> None:
    set_log_context(demo="users")
    try:
        payload = json.loads(JsonFormatter(extra_fields={"app": "streamnotes"}).format(_record(stage="filter")))
    finally:
        clear_log_context()

    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["stage"] == "filter"
    assert payload["app"] == "streamnotes"
    assert payload["demo"] == "users"
    assert payload["timestamp"].endswith("Z")


def test_json_formatter_includes_exception() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    payload = json.loads(JsonFormatter().format(record))
    assert "ValueError: boom" in payload["exception"]


def test_text_formatter_layout() -> None:
    line = TextFormatter().format(_record())
    assert line.endswith("| INFO | streamnotes.test | hello world")


def test_log_context_is_copied() -> None:
    set_log_context(a=1)
    ctx = get_log_context()
    ctx["b"] = 2
    assert get_log_context() == {"a": 1}
    clear_log_context()
    assert get_log_context() == {}


def test_setup_logging_override_installs_json_handler(
    restore_root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("STREAMNOTES_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOGGING__LEVEL", raising=False)
    cfg = setup_logging(level="debug", json_logs=True, override_root_handlers=True)

    assert cfg.level == "DEBUG"
    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)


def test_setup_logging_keeps_existing_handlers_by_default(restore_root_logger: logging.Logger) -> None:
    existing = logging.NullHandler()
    restore_root_logger.handlers[:] = [existing]

    setup_logging(level="INFO", json_logs=False, override_root_handlers=False)

    assert restore_root_logger.handlers == [existing]


def test_setup_logging_writes_to_stderr(restore_root_logger: logging.Logger) -> None:
    setup_logging(level="INFO", json_logs=False, override_root_handlers=True)

    handler = restore_root_logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stderr
    assert isinstance(handler.formatter, TextFormatter)
