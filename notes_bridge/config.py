"""Configuration for notes-bridge.

Use `notes-bridge config set <key> <value>` to configure, or edit
~/.config/notes-bridge/config.json directly.
"""

from __future__ import annotations

import json

from .logging import NotesBridgeError
from .paths import CONFIG_FILE

# Default configuration values
DEFAULT_CONFIG = {
    "timeout_ms": 30000,
}


def _load_config() -> dict:
    """Load configuration from config file."""
    if not CONFIG_FILE.exists():
        return {}
    try:
        config = json.loads(CONFIG_FILE.read_text())
    except (json.JSONDecodeError, OSError):
        return {}
    return config if isinstance(config, dict) else {}


def get_config() -> dict:
    """Get the full configuration with defaults applied.

    Returns a dict with all config keys, using file values where present
    and defaults otherwise.
    """
    config = _load_config()
    return {**DEFAULT_CONFIG, **config}


def get_timeout_ms() -> int:
    """Default execution timeout in milliseconds.

    Falls back to the built-in default if the stored value is not a
    positive integer.
    """
    value = _load_config().get("timeout_ms")
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return DEFAULT_CONFIG["timeout_ms"]


def parse_config_value(key: str, raw: str) -> int | bool | str:
    """Convert a CLI string to the type of the key's default.

    Raises:
        NotesBridgeError: If the key is unknown or the value doesn't parse
    """
    if key not in DEFAULT_CONFIG:
        known = ", ".join(sorted(DEFAULT_CONFIG))
        raise NotesBridgeError(f"Unknown config key: {key} (known keys: {known})")

    default = DEFAULT_CONFIG[key]
    if isinstance(default, bool):
        if raw.lower() in ("true", "1", "yes", "on"):
            return True
        if raw.lower() in ("false", "0", "no", "off"):
            return False
        raise NotesBridgeError(f"Invalid value for {key}: {raw} (expected true/false)")
    if isinstance(default, int):
        try:
            value = int(raw)
        except ValueError:
            raise NotesBridgeError(
                f"Invalid value for {key}: {raw} (expected an integer)"
            ) from None
        if value <= 0:
            raise NotesBridgeError(f"Invalid value for {key}: {raw} (must be positive)")
        return value
    return raw


def set_config_value(key: str, value: int | bool | str) -> None:
    """Set a configuration value and persist to file.

    Args:
        key: Configuration key (e.g., "timeout_ms")
        value: Value to set, already converted with parse_config_value
    """
    config = _load_config()
    config[key] = value

    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(config, indent=2) + "\n")
