"""Helpers for opening the workout database."""
from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from backend import DEFAULT_DB_PATH, SCHEMA_PATH

# Tables the player needs before a session can start.
REQUIRED_TABLES = [
    "workouts",
    "exercises",
    "completed_workouts",
]


def missing_tables(db_path: Path = DEFAULT_DB_PATH) -> list[str]:
    """Return required tables absent from ``db_path``."""

    with sqlite3.connect(str(db_path)) as conn:
        cur = conn.cursor()
        cur.execute("SELECT name FROM sqlite_master WHERE type='table'")
        present = {row[0] for row in cur.fetchall()}
    return [name for name in REQUIRED_TABLES if name not in present]


def ensure_schema(
    db_path: Path = DEFAULT_DB_PATH, schema_path: Path = SCHEMA_PATH
) -> Path:
    """Create the database at ``db_path`` if any required table is missing.

    The schema script only uses ``CREATE ... IF NOT EXISTS`` so running it
    against an existing database leaves stored rows untouched.
    """

    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    if db_path.exists() and not missing_tables(db_path):
        return db_path
    with open(schema_path, "r", encoding="utf-8") as fh:
        script = fh.read()
    with sqlite3.connect(str(db_path)) as conn:
        conn.executescript(script)
    logging.info("Initialised workout database at %s", db_path)
    return db_path
