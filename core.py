"""Convenience imports for the application entry point.

The logic lives in :mod:`backend`; this module gathers the names the UI
uses so screens only need ``import core``.
"""

from __future__ import annotations

from backend import (
    DEFAULT_DB_PATH,
    DEFAULT_HOUR_GOAL,
    DEFAULT_REST_DURATION,
    DEFAULT_WORKOUT_GOAL,
    REST_TICK_INTERVAL,
    SCHEMA_PATH,
)
from backend.completions import (
    CompletionRecorder,
    get_goal_progress,
    record_completion,
    weekly_totals,
)
from backend.database import ensure_schema
from backend.errors import FetchError, RecordingError, WorkoutNotFoundError
from backend.player import WorkoutPlayer
from backend.routines import RoutineStore, fetch_workout, list_workouts
from backend.snapshots import Mode, format_clock

__all__ = [
    "DEFAULT_DB_PATH",
    "DEFAULT_HOUR_GOAL",
    "DEFAULT_REST_DURATION",
    "DEFAULT_WORKOUT_GOAL",
    "REST_TICK_INTERVAL",
    "SCHEMA_PATH",
    "CompletionRecorder",
    "get_goal_progress",
    "record_completion",
    "weekly_totals",
    "ensure_schema",
    "FetchError",
    "RecordingError",
    "WorkoutNotFoundError",
    "WorkoutPlayer",
    "RoutineStore",
    "fetch_workout",
    "list_workouts",
    "Mode",
    "format_clock",
]
