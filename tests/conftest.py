"""Pytest configuration and fixtures."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from notes_bridge import runner as runner_module
from notes_bridge.runner import CommandResult


class FakeRunner:
    """CommandRunner double that records calls instead of spawning processes.

    Queue results (or exceptions) with `respond`; when the queue is empty the
    last response is reused.
    """

    def __init__(self):
        self.calls: list[dict] = []
        self._responses: list[CommandResult | Exception] = [CommandResult()]

    def respond(self, *responses: CommandResult | Exception) -> FakeRunner:
        self._responses = list(responses)
        return self

    def run(self, argv, *, timeout: float) -> CommandResult:
        self.calls.append({"argv": list(argv), "timeout": timeout})
        response = (
            self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        )
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_runner(monkeypatch) -> FakeRunner:
    """Install a FakeRunner as the default runner for the test."""
    fake = FakeRunner()
    monkeypatch.setattr(runner_module, "default_runner", fake)
    return fake


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch) -> Path:
    """Point the config file at a temp dir and keep logs off disk."""
    from notes_bridge import config

    config_file = tmp_path / "config" / "config.json"
    monkeypatch.setattr(config, "CONFIG_FILE", config_file)
    monkeypatch.setenv("NOTES_BRIDGE_LOG", "none")
    monkeypatch.delenv("NOTES_BRIDGE_TIMEOUT_MS", raising=False)
    return config_file


@pytest.fixture(autouse=True)
def reset_log_handlers():
    """Drop handlers the CLI attached to CliRunner's temporary streams."""
    yield
    root = logging.getLogger("notes_bridge")
    for handler in list(root.handlers):
        if not isinstance(handler, logging.NullHandler):
            root.removeHandler(handler)
    root.propagate = True
