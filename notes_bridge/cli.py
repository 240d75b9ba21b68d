"""Main CLI entry point for notes-bridge."""

from __future__ import annotations

import json
import shutil
import sys

import click

from .applescript import is_permission_error, run_applescript
from .compare import run_comparison
from .config import get_config, get_timeout_ms, parse_config_value, set_config_value
from .input import read_input
from .jxa import JXAOptions, build_command, build_notes_jxa, escape_for_jxa, execute_jxa
from .logging import NotesBridgeError, configure_logging, get_logger
from .runner import format_command

logger = get_logger(__name__)

PERMISSION_HINT = (
    "Automation permission required. Grant when prompted, or enable in:\n"
    "  System Settings > Privacy & Security > Automation"
)


class ErrorHandlingGroup(click.Group):
    """Click group that handles NotesBridgeError with clean output."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except NotesBridgeError as e:
            logger.error(str(e))
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)


def _options(timeout_ms: int | None) -> JXAOptions:
    """Execution options from the CLI flag, falling back to config."""
    return JXAOptions(timeout_ms=timeout_ms or get_timeout_ms())


timeout_option = click.option(
    "--timeout-ms",
    type=click.IntRange(min=1),
    envvar="NOTES_BRIDGE_TIMEOUT_MS",
    help="Kill osascript after this many milliseconds (default: config timeout_ms)",
)


@click.group(cls=ErrorHandlingGroup)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging to stderr")
@click.option(
    "--json-log",
    metavar="FILE",
    envvar="NOTES_BRIDGE_LOG",
    default="auto",
    help='JSON log file path (default: auto, "-" for stdout, "none" to disable)',
)
def cli(verbose: bool, json_log: str):
    """notes-bridge: run JXA and AppleScript against Apple Notes."""
    # Allow "none" to disable file logging
    log_file = None if json_log == "none" else json_log
    configure_logging(verbose=verbose, json_log=log_file)


@cli.command()
@click.argument("text", required=False)
def escape(text: str | None):
    """Escape text for a double-quoted JXA string literal.

    Reads TEXT, or stdin when TEXT is omitted. Stdin is used as-is, so a
    trailing newline is escaped too.

    Example:
        notes-bridge escape 'He said "hi"'
    """
    if text is None:
        text = read_input(None, what="text")
    click.echo(escape_for_jxa(text))


@cli.command()
@click.argument("fragment", type=click.File("r", encoding="utf-8"), required=False)
def wrap(fragment):
    """Wrap a JXA fragment with a Notes.app handle.

    Reads FRAGMENT (a file path, or "-" for stdin), or stdin when omitted.
    """
    click.echo(build_notes_jxa(read_input(fragment, what="fragment")))


@cli.command()
@click.argument("script", type=click.File("r", encoding="utf-8"), required=False)
@click.option("--notes", is_flag=True, help="Wrap the script with a Notes.app handle")
@timeout_option
@click.option(
    "--print-command",
    is_flag=True,
    help="Print the equivalent shell command instead of running it",
)
def run(script, notes: bool, timeout_ms: int | None, print_command: bool):
    """Execute a JXA script and print the result as JSON.

    Reads SCRIPT (a file path, or "-" for stdin), or stdin when omitted.
    Exits with status 1 when execution fails.

    Example:
        echo 'Notes.accounts().map(a => a.name())' | notes-bridge run --notes
    """
    source = read_input(script)
    if notes:
        source = build_notes_jxa(source)

    if print_command:
        if not source.strip():
            raise NotesBridgeError("Cannot execute empty JXA script")
        click.echo(format_command(build_command(source.strip())))
        return

    result = execute_jxa(source, _options(timeout_ms))
    click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    if not result.success:
        if is_permission_error(result.error):
            click.echo(PERMISSION_HINT, err=True)
        sys.exit(1)


@cli.command()
@timeout_option
def compare(timeout_ms: int | None):
    """Compare AppleScript and JXA on read-only Notes operations.

    Runs each probe in both languages and prints outputs, timings and a
    summary as JSON. Requires Notes.app and Automation permission.
    """
    report = run_comparison(options=_options(timeout_ms))
    click.echo(json.dumps(report, indent=2, ensure_ascii=False))


@cli.command()
def status():
    """Show osascript availability and Notes automation permission."""
    osascript = shutil.which("osascript")
    if osascript is None:
        click.echo("osascript: " + click.style("Not found", fg="red"))
        click.echo("  notes-bridge requires macOS.")
        return
    click.echo("osascript: " + click.style(f"OK ({osascript})", fg="green"))

    # Only reads the app name; nothing in Notes is touched
    try:
        run_applescript(
            'tell application "Notes" to get name', timeout_ms=get_timeout_ms()
        )
        click.echo("Notes: " + click.style("OK", fg="green"))
    except NotesBridgeError as e:
        if is_permission_error(str(e)):
            click.echo("Notes: " + click.style("No Automation permission", fg="yellow"))
            click.echo("  Grant when prompted on first use, or enable in:")
            click.echo("  System Settings > Privacy & Security > Automation")
        else:
            click.echo("Notes: " + click.style(f"Error - {e}", fg="red"))


@cli.group()
def config():
    """Show or change notes-bridge settings."""


@config.command("show")
def config_show():
    """Show the configuration with defaults applied."""
    click.echo(json.dumps(get_config(), indent=2))


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str):
    """Set a configuration value.

    \b
    Keys:
        timeout_ms  Default execution timeout in milliseconds (default: 30000)
    """
    parsed = parse_config_value(key, value)
    set_config_value(key, parsed)
    logger.info("Updated config", key=key, value=parsed)
    click.echo(f"{key} = {json.dumps(parsed)}")


@cli.command()
@click.argument("shell", type=click.Choice(["bash", "zsh", "fish"]))
def completions(shell: str):
    """Print a tab-completion script for notes-bridge.

    Completes subcommands and options such as `run --notes` and
    `config set timeout_ms`. Load it from your shell startup file:

    \b
    Bash (~/.bashrc):
        eval "$(notes-bridge completions bash)"

    \b
    Zsh (~/.zshrc):
        eval "$(notes-bridge completions zsh)"

    \b
    Fish (~/.config/fish/config.fish):
        notes-bridge completions fish | source
    """
    from click.shell_completion import get_completion_class

    comp_cls = get_completion_class(shell)
    if comp_cls is None:
        raise NotesBridgeError(f"Unsupported shell: {shell}")

    comp = comp_cls(cli, {}, "notes-bridge", "_NOTES_BRIDGE_COMPLETE")
    click.echo(comp.source())
