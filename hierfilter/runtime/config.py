"""Persistent JSON config helpers.

Stores presentation preferences only: the terminal theme and formatting
overrides used to seed the initial settings. Selection state is never
written. All access is defensive: malformed or missing config falls back
safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from ..settings import VisualSettings

APP_NAME = "hierfilter"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_settings_overrides() -> dict[str, dict[str, object]]:
    """Return the ``settings`` object in host metadata shape.

    Groups that are not JSON objects are dropped.
    """
    value = load_config().get("settings")
    if not isinstance(value, dict):
        return {}
    return {
        str(group): dict(fields)
        for group, fields in value.items()
        if isinstance(fields, dict)
    }


def load_initial_settings() -> VisualSettings:
    """Build defaults with persisted overrides merged on top."""
    return VisualSettings.parse(load_settings_overrides())


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)
