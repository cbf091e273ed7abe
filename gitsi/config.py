"""Persistent JSON config helpers.

Stores the UI theme, diff style, pager command, and last committed search term.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .runner import DEFAULT_PAGER

APP_NAME = "gitsi"
CONFIG_FILENAME = "config.json"
CONFIG_DIR = Path(user_config_dir(APP_NAME, appauthor=False))
CONFIG_PATH = CONFIG_DIR / CONFIG_FILENAME


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

    Filesystem errors are ignored so an unwritable config never interrupts
    the session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_str(key: str) -> str | None:
    value = load_config().get(key)
    return value if isinstance(value, str) else None


def _save_str(key: str, value: str) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def load_theme_name() -> str | None:
    return _load_str("theme")


def load_style() -> str | None:
    return _load_str("style")


def load_pager() -> str:
    """Return the configured pager command line, or the default ``less`` call."""
    pager = _load_str("pager")
    if pager is None or not pager.strip():
        return DEFAULT_PAGER
    return pager


def load_search_term() -> str:
    """Return the last committed search term; anything but a string reads as empty."""
    return _load_str("search_term") or ""


def save_search_term(term: str) -> None:
    _save_str("search_term", term)
