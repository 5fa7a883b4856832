import sqlite3
from pathlib import Path
import sys
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from backend import settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep tests from reading or writing the real settings file."""
    monkeypatch.setattr(settings, "SETTINGS_PATH", tmp_path / "settings.json")
    settings.clear_cache()
    yield
    settings.clear_cache()


@pytest.fixture
def sample_db(tmp_path: Path) -> Path:
    """Create a temporary database with a few workouts.

    ``Push Day`` (id 1): Push-up 2 sets, Bench Press 3 sets.
    ``Single`` (id 2): Squat 3 sets.
    ``Empty`` (id 3): no exercises.
    ``Old`` (id 4): deleted.
    """
    db_path = tmp_path / "workout.db"
    sql_path = Path(__file__).resolve().parent.parent / "data" / "workout_schema.sql"

    conn = sqlite3.connect(db_path)
    with open(sql_path, "r", encoding="utf-8") as fh:
        conn.executescript(fh.read())

    conn.execute("INSERT INTO workouts (id, title, created_at) VALUES (1, 'Push Day', 100)")
    conn.execute("INSERT INTO workouts (id, title, created_at) VALUES (2, 'Single', 200)")
    conn.execute("INSERT INTO workouts (id, title, created_at) VALUES (3, 'Empty', 300)")
    conn.execute(
        "INSERT INTO workouts (id, title, created_at, deleted) VALUES (4, 'Old', 400, 1)"
    )
    conn.executemany(
        """
        INSERT INTO exercises (workout_id, name, sets, reps, weight, position)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        [
            (1, "Bench Press", 3, 8, 60.0, 1),
            (1, "Push-up", 2, 15, None, 0),
            (2, "Squat", 3, 5, 100.0, 0),
        ],
    )
    conn.commit()
    conn.close()
    return db_path


class FakeEvent:
    def __init__(self, scheduler, callback, interval):
        self.scheduler = scheduler
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Stand-in for Kivy's ``Clock`` driven by :meth:`tick`."""

    def __init__(self):
        self.events: list[FakeEvent] = []

    def schedule_interval(self, callback, interval):
        event = FakeEvent(self, callback, interval)
        self.events.append(event)
        return event

    @property
    def active(self) -> list[FakeEvent]:
        return [e for e in self.events if not e.cancelled]

    def tick(self, count: int = 1) -> None:
        """Fire every live event ``count`` times, like Kivy would."""
        for _ in range(count):
            for event in self.active:
                if event.callback(event.interval) is False:
                    event.cancelled = True

    def fire_stale(self) -> None:
        """Deliver a step to events that were already cancelled."""
        for event in self.events:
            if event.cancelled:
                event.callback(event.interval)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


class FakeRecorder:
    def __init__(self, error=None):
        self.calls: list[tuple] = []
        self.error = error

    def record_completion(self, workout_id, duration_seconds, completed_at):
        self.calls.append((workout_id, duration_seconds, completed_at))
        if self.error:
            raise self.error


@pytest.fixture
def recorder() -> FakeRecorder:
    return FakeRecorder()


@pytest.fixture
def failing_recorder() -> FakeRecorder:
    from backend.errors import RecordingError

    return FakeRecorder(error=RecordingError("disk full"))


@pytest.fixture
def clock(monkeypatch):
    """Control ``time.time`` as seen by the player and the recorder."""
    from backend import player as player_module

    class _Clock:
        now = 1000.0

        def __call__(self):
            return self.now

        def advance(self, seconds: float) -> None:
            self.now += seconds

    fake = _Clock()
    monkeypatch.setattr(player_module.time, "time", fake)
    return fake
