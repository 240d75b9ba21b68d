"""Tests for logging module."""

from __future__ import annotations

import logging

from notes_bridge.jxa import JXAOptions, execute_jxa
from notes_bridge.logging import configure_logging
from notes_bridge.runner import CommandResult


class _RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


def test_unconfigured_library_use_stays_quiet(monkeypatch, fake_runner):
    """A timeout warning without configure_logging() never hits lastResort."""
    package_logger = logging.getLogger("notes_bridge")
    monkeypatch.setattr(package_logger, "propagate", False)
    last_resort = _RecordingHandler()
    monkeypatch.setattr(logging, "lastResort", last_resort)
    fake_runner.respond(CommandResult(returncode=None, timed_out=True))

    result = execute_jxa("delay(60)", JXAOptions(timeout_ms=5000))

    assert result.error == "Operation timed out after 5 seconds"
    assert last_resort.records == []


def test_configure_logging_keeps_null_handler():
    configure_logging(verbose=False, json_log=None)

    handlers = logging.getLogger("notes_bridge").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
    assert any(
        type(h) is logging.StreamHandler and h.level == logging.WARNING
        for h in handlers
    )


def test_json_log_file(tmp_path):
    log_file = tmp_path / "logs" / "notes-bridge.jsonl"
    configure_logging(json_log=str(log_file))

    logging.getLogger("notes_bridge.test").warning("hello")
    for handler in logging.getLogger("notes_bridge").handlers:
        handler.flush()

    assert '"event": "hello"' in log_file.read_text()
