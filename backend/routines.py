"""Read access to workout routines.

Routines are created and edited by the authoring screens; the player only
ever reads them.  A :class:`RoutineStore` is handed to each
:class:`~backend.player.WorkoutPlayer` so no module-level cache is kept.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from backend import DEFAULT_DB_PATH
from backend.errors import FetchError, WorkoutNotFoundError
from backend.models import Exercise, Workout


def _load_exercises(cursor: sqlite3.Cursor, workout_id: int) -> tuple[Exercise, ...]:
    cursor.execute(
        """
        SELECT id, workout_id, name, sets, reps, weight
          FROM exercises
         WHERE workout_id = ? AND deleted = 0
         ORDER BY position, id
        """,
        (workout_id,),
    )
    exercises = []
    for ex_id, wk_id, name, sets, reps, weight in cursor.fetchall():
        if not sets or sets < 1 or not reps or reps < 1:
            raise FetchError(
                f"Exercise '{name}' has invalid sets/reps ({sets}/{reps})"
            )
        if weight is not None and weight < 0:
            raise FetchError(f"Exercise '{name}' has a negative weight")
        exercises.append(
            Exercise(
                id=ex_id,
                workout_id=wk_id,
                name=name,
                sets=int(sets),
                reps=int(reps),
                weight=weight,
            )
        )
    return tuple(exercises)


def fetch_workout(workout_id: int, db_path: Path = DEFAULT_DB_PATH) -> Workout:
    """Return the workout ``workout_id`` with its exercises in order.

    Raises :class:`WorkoutNotFoundError` when the id is unknown or has been
    deleted, and :class:`FetchError` for any database failure.
    """

    try:
        with sqlite3.connect(str(db_path)) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, title FROM workouts WHERE id = ? AND deleted = 0",
                (workout_id,),
            )
            row = cursor.fetchone()
            if not row:
                raise WorkoutNotFoundError(workout_id)
            exercises = _load_exercises(cursor, row[0])
    except sqlite3.Error as exc:
        raise FetchError(f"Could not load workout '{workout_id}': {exc}") from exc

    logging.info(
        "Loaded workout %s (%s) with %d exercises", row[0], row[1], len(exercises)
    )
    return Workout(id=row[0], title=row[1], exercises=exercises)


def list_workouts(db_path: Path = DEFAULT_DB_PATH) -> list[Workout]:
    """Return every workout, newest first."""

    try:
        with sqlite3.connect(str(db_path)) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, title FROM workouts WHERE deleted = 0 "
                "ORDER BY created_at DESC, id DESC"
            )
            rows = cursor.fetchall()
            return [
                Workout(id=wk_id, title=title, exercises=_load_exercises(cursor, wk_id))
                for wk_id, title in rows
            ]
    except sqlite3.Error as exc:
        raise FetchError(f"Could not list workouts: {exc}") from exc


class RoutineStore:
    """Routine access bound to a single database file."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)

    def fetch_workout(self, workout_id: int) -> Workout:
        return fetch_workout(workout_id, db_path=self.db_path)

    def list_workouts(self) -> list[Workout]:
        return list_workouts(db_path=self.db_path)
