"""Logging setup and the base error type for notes-bridge.

Console output goes to stderr through structlog's console renderer. A JSON
log file (one object per line) records every event at DEBUG level so a
failed run can be inspected after the fact.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

from .paths import LOG_FILE

_LOGGER_NAME = "notes_bridge"


class NotesBridgeError(Exception):
    """User-facing error. The CLI prints the message and exits 1."""


_SHARED_PROCESSORS: list = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


# Route events through stdlib logging even before configure_logging() runs,
# so library use never prints to stdout.
_configure_structlog()

# Without configure_logging() events are dropped rather than reaching
# logging.lastResort.
logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())


def _make_formatter(renderer) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=_SHARED_PROCESSORS,
    )


def configure_logging(verbose: bool = False, json_log: str | None = None) -> None:
    """Attach console and JSON handlers to the package logger.

    Args:
        verbose: Show DEBUG events on stderr (default shows WARNING and up)
        json_log: "auto" for the default log file, "-" for stdout, a path,
            or None to disable JSON logging
    """
    _configure_structlog()

    root = logging.getLogger(_LOGGER_NAME)
    for handler in list(root.handlers):
        if isinstance(handler, logging.NullHandler):
            continue
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.DEBUG)
    root.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console.setFormatter(_make_formatter(structlog.dev.ConsoleRenderer(colors=False)))
    root.addHandler(console)

    if json_log is None:
        return

    if json_log == "-":
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
    else:
        path = LOG_FILE if json_log == "auto" else Path(json_log)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(path, encoding="utf-8")
        except OSError as e:
            get_logger(__name__).warning(
                "Could not open JSON log file", path=str(path), error=str(e)
            )
            return
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(_make_formatter(structlog.processors.JSONRenderer()))
    root.addHandler(handler)


def get_logger(name: str):
    """Return a structlog logger for a module (pass __name__)."""
    return structlog.get_logger(name)
