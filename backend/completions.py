"""Persistence of finished workouts and the weekly totals built on them.

Each session that reaches the end writes a single row to
``completed_workouts``.  Rows are never updated or deleted here; the weekly
summary simply sums ``duration`` over the rows written since Monday.
"""

from __future__ import annotations

import datetime
import logging
import sqlite3
import time
from pathlib import Path

from backend import DEFAULT_DB_PATH
from backend.errors import FetchError, RecordingError
from backend.models import CompletedWorkoutRecord, WeeklyTotals
from backend import settings


def record_completion(
    workout_id: int,
    duration_seconds: int,
    completed_at: float | None = None,
    db_path: Path = DEFAULT_DB_PATH,
) -> CompletedWorkoutRecord:
    """Insert one completion record and return it.

    ``completed_at`` defaults to the current time.  Failures are raised as
    :class:`RecordingError`; the write is never retried.
    """

    duration = int(duration_seconds)
    if duration < 0:
        raise RecordingError(f"Duration must not be negative, got {duration}")
    if completed_at is None:
        completed_at = time.time()

    try:
        with sqlite3.connect(str(db_path)) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO completed_workouts (workout_id, duration, completed_at)
                VALUES (?, ?, ?)
                """,
                (workout_id, duration, completed_at),
            )
            record_id = cursor.lastrowid
    except sqlite3.Error as exc:
        raise RecordingError(f"Could not save completed workout: {exc}") from exc

    logging.info(
        "Recorded completion of workout %s (%ds) as #%s",
        workout_id,
        duration,
        record_id,
    )
    return CompletedWorkoutRecord(
        id=record_id,
        workout_id=workout_id,
        duration=duration,
        completed_at=completed_at,
    )


def most_recent_monday(now: float | None = None) -> float:
    """Return local midnight of this week's Monday as epoch seconds."""

    if now is None:
        now = time.time()
    today = datetime.datetime.fromtimestamp(now).date()
    monday = today - datetime.timedelta(days=today.weekday())
    return datetime.datetime.combine(monday, datetime.time.min).timestamp()


def get_completed_since(
    since: float, db_path: Path = DEFAULT_DB_PATH
) -> list[CompletedWorkoutRecord]:
    """Return completion records with ``completed_at >= since``, oldest first."""

    try:
        with sqlite3.connect(str(db_path)) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, workout_id, duration, completed_at
                  FROM completed_workouts
                 WHERE completed_at >= ?
                 ORDER BY completed_at
                """,
                (since,),
            )
            rows = cursor.fetchall()
    except sqlite3.Error as exc:
        raise FetchError(f"Could not read completed workouts: {exc}") from exc
    return [
        CompletedWorkoutRecord(id=r[0], workout_id=r[1], duration=r[2], completed_at=r[3])
        for r in rows
    ]


def weekly_totals(now: float | None = None, db_path: Path = DEFAULT_DB_PATH) -> WeeklyTotals:
    """Count and sum the workouts completed since the most recent Monday."""

    since = most_recent_monday(now)
    records = get_completed_since(since, db_path=db_path)
    return WeeklyTotals(
        since=since,
        total_workouts=len(records),
        total_seconds=sum(r.duration for r in records),
    )


def get_goal_progress(now: float | None = None, db_path: Path = DEFAULT_DB_PATH) -> dict:
    """Return this week's totals next to the configured goals."""

    totals = weekly_totals(now, db_path=db_path)
    workout_goal, hour_goal = settings.get_goals()
    return {
        "total_workouts": totals.total_workouts,
        "total_hours": totals.total_hours,
        "workout_goal": workout_goal,
        "hour_goal": hour_goal,
        "workouts_remaining": max(workout_goal - totals.total_workouts, 0),
        "hours_remaining": max(hour_goal - totals.total_hours, 0),
    }


class CompletionRecorder:
    """Completion writes bound to a single database file."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)

    def record_completion(
        self, workout_id: int, duration_seconds: int, completed_at: float | None = None
    ) -> CompletedWorkoutRecord:
        return record_completion(
            workout_id, duration_seconds, completed_at, db_path=self.db_path
        )

    def goal_progress(self, now: float | None = None) -> dict:
        return get_goal_progress(now, db_path=self.db_path)
