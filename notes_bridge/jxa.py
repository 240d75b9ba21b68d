"""JXA (JavaScript for Automation) execution utilities.

JXA runs on the same OSA infrastructure as AppleScript but with JavaScript
syntax, so user text only needs standard JavaScript string escaping before
it's embedded in a script.

Example:
    fragment = f'Notes.notes.byName("{escape_for_jxa(title)}").plaintext()'
    result = execute_jxa(build_notes_jxa(fragment))
    if result.success:
        print(result.output)
"""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass

from . import runner as runner_module
from .logging import get_logger
from .runner import CommandRunner, format_command

logger = get_logger(__name__)

DEFAULT_TIMEOUT_MS = 30000

_LANGUAGE_LABELS = {"JavaScript": "JXA", "AppleScript": "AppleScript"}

# osascript reports script errors as "... Error: <details>"
_ERROR_DETAILS = re.compile(r"Error: (.+)")


@dataclass(frozen=True)
class JXAOptions:
    """Execution options. timeout_ms bounds wall-clock time per call."""

    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self):
        if (
            not isinstance(self.timeout_ms, int)
            or isinstance(self.timeout_ms, bool)
            or self.timeout_ms <= 0
        ):
            raise ValueError(
                f"timeout_ms must be a positive integer, got {self.timeout_ms!r}"
            )

    @property
    def timeout_seconds(self) -> int:
        """Timeout in whole seconds, rounded half up."""
        return (self.timeout_ms + 500) // 1000


@dataclass(frozen=True)
class JXAResult:
    """Outcome of one execution: trimmed output on success, error otherwise."""

    success: bool
    output: str = ""
    error: str | None = None

    def to_dict(self) -> dict:
        data: dict = {"success": self.success, "output": self.output}
        if self.error is not None:
            data["error"] = self.error
        return data


def escape_for_jxa(text: str | None) -> str:
    """Escape text for embedding inside a double-quoted JXA string literal.

    Backslashes are escaped first so the sequences added for quotes and
    control characters aren't escaped again. Single quotes and non-ASCII
    characters pass through unchanged.
    """
    if not text:
        return ""

    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def build_notes_jxa(code: str) -> str:
    """Wrap a trusted JXA fragment so it runs with a Notes.app handle bound.

    The fragment is inlined verbatim; escape any user text with
    escape_for_jxa before building it.
    """
    return f"""
    const Notes = Application("Notes");
    Notes.includeStandardAdditions = true;
    {code}
  """


def build_command(script: str, language: str = "JavaScript") -> list[str]:
    """Build the osascript argv for an inline script."""
    return ["osascript", "-l", language, "-e", script]


def _error_message(message: str, label: str) -> str:
    """Reduce an interpreter error to its details."""
    message = message.strip()
    if not message:
        return f"{label} execution failed with unknown error"
    match = _ERROR_DETAILS.search(message)
    return match.group(1) if match else message


def execute_osa(
    script: str,
    *,
    language: str,
    options: JXAOptions | None = None,
    runner: CommandRunner | None = None,
) -> JXAResult:
    """Run a script through osascript in the given OSA language.

    Never raises for empty scripts, timeouts, interpreter errors, spawn
    failures or arguments the OS rejects; they all come back as JXAResult(success=False, error=...).
    """
    options = options or JXAOptions()
    runner = runner or runner_module.default_runner
    label = _LANGUAGE_LABELS.get(language, language)

    if not script or not script.strip():
        return JXAResult(success=False, error=f"Cannot execute empty {label} script")

    argv = build_command(script.strip(), language)
    logger.debug(
        "Running osascript",
        language=language,
        timeout_ms=options.timeout_ms,
        command=format_command(argv),
    )

    try:
        result = runner.run(argv, timeout=options.timeout_ms / 1000)
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        # ValueError: NUL bytes or lone surrogates the OS can't take in argv
        logger.debug("Could not run osascript", error=str(e))
        return JXAResult(success=False, error=_error_message(str(e), label))

    if result.timed_out:
        logger.warning("osascript timed out", timeout_ms=options.timeout_ms)
        return JXAResult(
            success=False,
            error=f"Operation timed out after {options.timeout_seconds} seconds",
        )

    if result.returncode != 0:
        logger.debug(
            "osascript failed", returncode=result.returncode, stderr=result.stderr
        )
        return JXAResult(success=False, error=_error_message(result.stderr, label))

    return JXAResult(success=True, output=result.stdout.strip())


def execute_jxa(
    script: str,
    options: JXAOptions | None = None,
    *,
    runner: CommandRunner | None = None,
) -> JXAResult:
    """Execute a JXA script via `osascript -l JavaScript`.

    Args:
        script: The JavaScript code to execute
        options: Execution options (default timeout is 30 seconds)
        runner: Command runner, defaults to a subprocess-backed runner

    Returns:
        JXAResult with trimmed output on success, or an error message
    """
    return execute_osa(script, language="JavaScript", options=options, runner=runner)
