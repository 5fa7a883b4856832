import datetime
import sqlite3

import pytest

from backend import completions, settings
from backend.completions import CompletionRecorder
from backend.errors import FetchError, RecordingError


def _ts(year, month, day, hour=0, minute=0):
    return datetime.datetime(year, month, day, hour, minute).timestamp()


def test_record_completion_inserts_one_row(sample_db):
    record = completions.record_completion(1, 1800, 5000.0, db_path=sample_db)
    assert record.workout_id == 1
    assert record.duration == 1800
    assert record.completed_at == 5000.0

    conn = sqlite3.connect(sample_db)
    rows = conn.execute(
        "SELECT id, workout_id, duration, completed_at FROM completed_workouts"
    ).fetchall()
    conn.close()
    assert rows == [(record.id, 1, 1800, 5000.0)]


def test_record_completion_defaults_timestamp(sample_db, monkeypatch):
    monkeypatch.setattr(completions.time, "time", lambda: 1234.0)
    record = completions.record_completion(2, 60, db_path=sample_db)
    assert record.completed_at == 1234.0


def test_negative_duration_rejected(sample_db):
    with pytest.raises(RecordingError):
        completions.record_completion(1, -1, 10.0, db_path=sample_db)


def test_database_failure_raises_recording_error(tmp_path):
    with pytest.raises(RecordingError):
        completions.record_completion(1, 10, 10.0, db_path=tmp_path / "blank.db")


def test_recorder_binds_db_path(sample_db):
    recorder = CompletionRecorder(sample_db)
    recorder.record_completion(1, 10, 100.0)
    recorder.record_completion(2, 20, 200.0)
    assert [r.duration for r in completions.get_completed_since(0, db_path=sample_db)] == [10, 20]


@pytest.mark.parametrize(
    "now, expected",
    [
        (_ts(2026, 10, 19, 9, 30), _ts(2026, 10, 19)),  # Monday
        (_ts(2026, 10, 21, 18), _ts(2026, 10, 19)),  # Wednesday
        (_ts(2026, 10, 25, 23, 59), _ts(2026, 10, 19)),  # Sunday
        (_ts(2026, 10, 26, 0, 0), _ts(2026, 10, 26)),  # next Monday
    ],
)
def test_most_recent_monday(now, expected):
    assert completions.most_recent_monday(now) == expected


def test_weekly_totals_only_count_this_week(sample_db):
    now = _ts(2026, 10, 22, 12)
    for completed_at, duration in [
        (_ts(2026, 10, 18, 23, 59), 3600),  # previous Sunday
        (_ts(2026, 10, 19, 0, 0), 1800),
        (_ts(2026, 10, 20, 7), 5400),
        (_ts(2026, 10, 22, 11), 2700),
    ]:
        completions.record_completion(1, duration, completed_at, db_path=sample_db)

    totals = completions.weekly_totals(now, db_path=sample_db)
    assert totals.since == _ts(2026, 10, 19)
    assert totals.total_workouts == 3
    assert totals.total_seconds == 9900
    assert totals.total_hours == 3


def test_weekly_totals_empty(sample_db):
    totals = completions.weekly_totals(_ts(2026, 10, 22), db_path=sample_db)
    assert (totals.total_workouts, totals.total_seconds, totals.total_hours) == (0, 0, 0)


def test_goal_progress_uses_defaults(sample_db):
    now = _ts(2026, 10, 22, 12)
    completions.record_completion(1, 7200, _ts(2026, 10, 20), db_path=sample_db)
    progress = completions.get_goal_progress(now, db_path=sample_db)
    assert progress == {
        "total_workouts": 1,
        "total_hours": 2,
        "workout_goal": 5,
        "hour_goal": 10,
        "workouts_remaining": 4,
        "hours_remaining": 8,
    }


def test_goal_progress_configured_goals(sample_db):
    settings.set_value("workout_goal", 1)
    settings.set_value("hour_goal", 1)
    now = _ts(2026, 10, 22, 12)
    completions.record_completion(1, 7200, _ts(2026, 10, 20), db_path=sample_db)
    progress = completions.get_goal_progress(now, db_path=sample_db)
    assert progress["workouts_remaining"] == 0
    assert progress["hours_remaining"] == 0


def test_completed_since_missing_table_raises_fetch_error(tmp_path):
    with pytest.raises(FetchError):
        completions.get_completed_since(0, db_path=tmp_path / "blank.db")


def test_recorder_goal_progress(sample_db):
    recorder = CompletionRecorder(sample_db)
    recorder.record_completion(2, 3600, _ts(2026, 10, 21))
    progress = recorder.goal_progress(_ts(2026, 10, 22, 12))
    assert progress["total_workouts"] == 1
    assert progress["total_hours"] == 1
    assert progress["workouts_remaining"] == 4
