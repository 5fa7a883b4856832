"""Loading and saving of user settings.

The settings are stored as a list of dictionaries to preserve order.
Each dictionary contains ``key``, ``value`` and ``type`` entries.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from backend import (
    DATA_DIR,
    DEFAULT_HOUR_GOAL,
    DEFAULT_REST_DURATION,
    DEFAULT_WORKOUT_GOAL,
)

# Path to the JSON file where settings are persisted.
SETTINGS_PATH = DATA_DIR / "settings.json"

# Default settings to initialize the file on first run.
DEFAULT_SETTINGS: List[Dict[str, Any]] = [
    {"key": "rest_duration", "value": DEFAULT_REST_DURATION, "type": "int"},
    {"key": "workout_goal", "value": DEFAULT_WORKOUT_GOAL, "type": "int"},
    {"key": "hour_goal", "value": DEFAULT_HOUR_GOAL, "type": "int"},
]

# Internal cache so settings are only read from disk once.
_settings_cache: List[Dict[str, Any]] | None = None


def load_settings(path: Path | None = None) -> List[Dict[str, Any]]:
    """Load settings from :data:`SETTINGS_PATH` or create defaults."""
    path = Path(path or SETTINGS_PATH)
    if path.exists():
        try:
            with path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError):
            logging.warning("Unreadable settings file %s, using defaults", path)
        else:
            if isinstance(data, list):
                return data
    defaults = [item.copy() for item in DEFAULT_SETTINGS]
    save_settings(defaults, path)
    return defaults


def save_settings(settings: List[Dict[str, Any]], path: Path | None = None) -> None:
    """Persist ``settings`` to :data:`SETTINGS_PATH`."""
    path = Path(path or SETTINGS_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(settings, fh)


def get_settings() -> List[Dict[str, Any]]:
    """Return the cached settings list, loading from disk if needed."""
    global _settings_cache
    if _settings_cache is None:
        _settings_cache = load_settings()
    return _settings_cache


def clear_cache() -> None:
    global _settings_cache
    _settings_cache = None


def get_value(key: str, default: Any = None) -> Any:
    """Fetch the value associated with ``key``."""
    for item in get_settings():
        if item.get("key") == key:
            return item.get("value")
    return default


def set_value(key: str, value: Any) -> None:
    """Update ``key`` with ``value`` and persist the change."""
    settings = get_settings()
    for item in settings:
        if item.get("key") == key:
            item["value"] = value
            break
    else:
        settings.append({"key": key, "value": value, "type": type(value).__name__})
    save_settings(settings)


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def get_rest_duration() -> int:
    """Return the configured rest interval in seconds."""
    try:
        value = int(get_value("rest_duration", DEFAULT_REST_DURATION))
    except (TypeError, ValueError):
        return DEFAULT_REST_DURATION
    # zero is allowed and means "no rest"
    return value if value >= 0 else DEFAULT_REST_DURATION


def get_goals() -> tuple[int, int]:
    """Return ``(workout_goal, hour_goal)`` with defaults for unset values."""
    return (
        _positive_int(get_value("workout_goal"), DEFAULT_WORKOUT_GOAL),
        _positive_int(get_value("hour_goal"), DEFAULT_HOUR_GOAL),
    )
