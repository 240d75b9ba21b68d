"""Integration tests for notes-bridge.

These tests run osascript against the real Notes.app. They are skipped by
default and must be run explicitly:

    uv run pytest -m integration

Before running, check Automation permission: notes-bridge status
"""
