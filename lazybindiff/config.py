"""Persistent JSON config helpers.

Stores the UI theme, an optional Pygments style, and the number of hex rows
shown per file. All access is defensive: malformed or missing config falls
back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .file_view import DEFAULT_LINES_PER_VIEW

logger = logging.getLogger(__name__)

APP_NAME = "lazybindiff"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

MIN_LINES_PER_VIEW = 1
MAX_LINES_PER_VIEW = 64


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored; failing to save a
    preference never interrupts a session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.debug("could not write config %s: %s", CONFIG_PATH, exc)


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_style_name() -> str | None:
    """Load persisted Pygments style name for the data columns."""
    return _load_string("style")


def load_lines_per_view() -> int:
    """Return hex rows per file, clamped to a sane range.

    Booleans and non-integers fall back to the default.
    """
    value = load_config().get("lines_per_view")
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_LINES_PER_VIEW
    return max(MIN_LINES_PER_VIEW, min(MAX_LINES_PER_VIEW, value))
