"""Persistent JSON config helpers.

Stores diff style, UI theme, refresh interval, and badge preference.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "lazystage"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_STYLE = "monokai"
DEFAULT_THEME_NAME = "default"
DEFAULT_REFRESH_SECONDS = 2.0


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so a read-only config dir is not fatal.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_string(key: str, default: str) -> str:
    value = load_config().get(key)
    if not isinstance(value, str) or not value.strip():
        return default
    return value.strip()


def load_style() -> str:
    """Return persisted Pygments style for the diff pane."""
    return _load_string("style", DEFAULT_STYLE)


def load_theme_name() -> str:
    return _load_string("theme", DEFAULT_THEME_NAME)


def load_refresh_seconds() -> float:
    """Return git-status poll interval; non-positive or non-numeric values fall back."""
    value = load_config().get("refresh_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_REFRESH_SECONDS
    return float(value)


def load_show_status_badges() -> bool:
    """Only explicit booleans are accepted; anything else means ``True``."""
    value = load_config().get("show_status_badges")
    return value if isinstance(value, bool) else True


def save_show_status_badges(show_badges: bool) -> None:
    """Persist the status-badge preference as a boolean."""
    config = load_config()
    config["show_status_badges"] = bool(show_badges)
    save_config(config)
