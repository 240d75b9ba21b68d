"""Shared fixtures for integration tests."""

from __future__ import annotations

import shutil
import sys

import pytest

from notes_bridge.jxa import build_notes_jxa, execute_jxa


@pytest.fixture(scope="session")
def notes_available():
    """Skip unless osascript exists and Notes.app can be scripted.

    This also serves as a permission check - if Automation access was
    denied, the session skips with a clear message.
    """
    if sys.platform != "darwin" or shutil.which("osascript") is None:
        pytest.skip("Integration tests require macOS with osascript")

    result = execute_jxa(build_notes_jxa("Notes.name();"))
    if not result.success:
        pytest.skip(
            f"Notes.app is not scriptable: {result.error}\n"
            "Grant Automation permission, then run 'notes-bridge status' to verify."
        )
