"""Input utilities for CLI commands."""

from __future__ import annotations

import sys
from typing import IO

import click


def read_input(source: IO[str] | None, *, what: str = "script") -> str:
    """Read text from an opened file, or from stdin when no file was given.

    Raises UsageError when stdin is an interactive terminal.
    """
    if source is not None:
        return source.read()

    if sys.stdin.isatty():
        raise click.UsageError(f"Expected {what} on stdin or as a file argument")

    return sys.stdin.read()
