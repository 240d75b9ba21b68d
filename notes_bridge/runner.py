"""Process seam for osascript.

Executors talk to a CommandRunner rather than to subprocess directly, so
tests can swap in a fake runner and never spawn a process.
"""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from typing import Protocol, Sequence

# Arguments made only of these characters need no shell quoting
_SHELL_SAFE = re.compile(r"^[A-Za-z0-9_@%+=:,./-]+$")


@dataclass(frozen=True)
class CommandResult:
    """Outcome of running one command.

    returncode is None when the process was killed for exceeding its
    timeout, in which case timed_out is True.
    """

    stdout: str = ""
    stderr: str = ""
    returncode: int | None = 0
    timed_out: bool = False


class CommandRunner(Protocol):
    def run(self, argv: Sequence[str], *, timeout: float) -> CommandResult: ...


class SubprocessRunner:
    """Runs commands with subprocess.run, capturing UTF-8 text output.

    OSError from spawning (e.g. the binary is missing) propagates to the
    caller.
    """

    def run(self, argv: Sequence[str], *, timeout: float) -> CommandResult:
        try:
            result = subprocess.run(
                list(argv),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            # subprocess.run kills the child before re-raising
            return CommandResult(
                stdout=_decode(e.stdout),
                stderr=_decode(e.stderr),
                returncode=None,
                timed_out=True,
            )
        return CommandResult(
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )


def _decode(output: str | bytes | None) -> str:
    # TimeoutExpired carries bytes even in text mode on some platforms
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def quote_for_shell(text: str) -> str:
    """Wrap text in single quotes for a POSIX shell.

    Each embedded single quote closes the quoting, adds an escaped quote
    and reopens it: ' becomes '\\''.
    """
    return "'" + text.replace("'", "'\\''") + "'"


def format_command(argv: Sequence[str]) -> str:
    """Render argv as a shell command line, quoting only where needed."""
    return " ".join(
        arg if _SHELL_SAFE.match(arg) else quote_for_shell(arg) for arg in argv
    )


default_runner: CommandRunner = SubprocessRunner()
