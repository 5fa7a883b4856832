"""Shared constants for backend modules."""

from __future__ import annotations

from pathlib import Path

# Rest interval inserted between sets and exercises, in seconds
DEFAULT_REST_DURATION = 60

# Cadence of the rest countdown in seconds
REST_TICK_INTERVAL = 1.0

# Weekly goals used whenever the user has not configured their own
DEFAULT_WORKOUT_GOAL = 5
DEFAULT_HOUR_GOAL = 10

# Path to the bundled SQLite database shipped with the application
DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_DB_PATH = DATA_DIR / "workout.db"
SCHEMA_PATH = DATA_DIR / "workout_schema.sql"

__all__ = [
    "DEFAULT_REST_DURATION",
    "REST_TICK_INTERVAL",
    "DEFAULT_WORKOUT_GOAL",
    "DEFAULT_HOUR_GOAL",
    "DATA_DIR",
    "DEFAULT_DB_PATH",
    "SCHEMA_PATH",
]
