"""XDG-compliant storage paths for notes-bridge.

- ~/.config/notes-bridge/       Config (persistent)
- ~/.local/state/notes-bridge/  Logs (safe to delete)

See: https://specifications.freedesktop.org/basedir-spec/latest/
"""

from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "notes-bridge"
STATE_DIR = Path.home() / ".local" / "state" / "notes-bridge"

CONFIG_FILE = CONFIG_DIR / "config.json"
LOG_FILE = STATE_DIR / "notes-bridge.jsonl"
