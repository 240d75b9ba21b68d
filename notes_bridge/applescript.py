"""AppleScript utilities for macOS automation."""

from __future__ import annotations

from . import runner as runner_module
from .jxa import DEFAULT_TIMEOUT_MS, JXAOptions, JXAResult, build_command, execute_osa
from .logging import NotesBridgeError
from .runner import CommandRunner

# Phrases osascript uses when Automation permission is missing
_PERMISSION_MARKERS = ("not allowed", "assistive", "-1743")


def execute_applescript(
    script: str,
    options: JXAOptions | None = None,
    *,
    runner: CommandRunner | None = None,
) -> JXAResult:
    """Execute an AppleScript; same result classification as execute_jxa."""
    return execute_osa(script, language="AppleScript", options=options, runner=runner)


def run_applescript(
    script: str,
    *args: str,
    runner: CommandRunner | None = None,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> str:
    """Run AppleScript with optional arguments passed via 'on run argv'.

    Args:
        script: The AppleScript source code to execute
        *args: Arguments passed to the script's 'on run argv' handler
        runner: Command runner, defaults to a subprocess-backed runner
        timeout_ms: Maximum run time before the process is killed

    Returns:
        The script's stdout output, stripped of trailing whitespace

    Raises:
        NotesBridgeError: If the script times out or exits with non-zero status
    """
    runner = runner or runner_module.default_runner
    argv = [*build_command(script, "AppleScript"), *args]
    try:
        result = runner.run(argv, timeout=timeout_ms / 1000)
    except (OSError, ValueError) as e:
        raise NotesBridgeError(f"Could not run osascript: {e}") from e
    if result.timed_out:
        raise NotesBridgeError(
            f"AppleScript timed out after {JXAOptions(timeout_ms).timeout_seconds} seconds"
        )
    if result.returncode != 0:
        raise NotesBridgeError(f"AppleScript error: {result.stderr.strip()}")
    return result.stdout.strip()


def is_permission_error(message: str | None) -> bool:
    """Check whether an osascript error means Automation access was denied."""
    if not message:
        return False
    lowered = message.lower()
    return any(marker in lowered for marker in _PERMISSION_MARKERS)
