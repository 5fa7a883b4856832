import dataclasses

import pytest

from backend.models import Exercise, Workout
from backend.snapshots import (
    ActiveSetSnapshot,
    CompletedSnapshot,
    FailedSnapshot,
    Mode,
    RestingSnapshot,
    format_clock,
)


@pytest.fixture
def workout():
    return Workout(
        id=1,
        title="Legs",
        exercises=(
            Exercise(id=1, workout_id=1, name="Squat", sets=2, reps=5, weight=100),
            Exercise(id=2, workout_id=1, name="Lunge", sets=3, reps=10),
        ),
    )


@pytest.mark.parametrize(
    "seconds, text",
    [(0, "00:00"), (59.9, "00:59"), (61, "01:01"), (3600, "60:00"), (-3, "00:00")],
)
def test_format_clock(seconds, text):
    assert format_clock(seconds) == text


def test_mode_tags():
    assert ActiveSetSnapshot.mode is Mode.ACTIVE_SET
    assert RestingSnapshot.mode is Mode.RESTING
    assert CompletedSnapshot.mode is Mode.COMPLETED
    assert FailedSnapshot.mode is Mode.FAILED


def test_resting_within_exercise(workout):
    snap = RestingSnapshot(workout, 0, 1, 30, 40)
    assert not snap.changes_exercise
    assert snap.upcoming_exercise.name == "Squat"
    assert snap.upcoming_set_index == 1
    assert snap.upcoming_label == "Squat set 2 of 2"


def test_resting_between_exercises(workout):
    snap = RestingSnapshot(workout, 0, 2, 30, 40)
    assert snap.finished_exercise.name == "Squat"
    assert snap.changes_exercise
    assert snap.upcoming_label == "Lunge set 1 of 3"


def test_only_resting_carries_rest_remaining(workout):
    assert not hasattr(ActiveSetSnapshot(workout, 0, 0, 0), "rest_remaining")
    assert not hasattr(CompletedSnapshot(workout, 10), "rest_remaining")


def test_snapshots_are_frozen(workout):
    snap = ActiveSetSnapshot(workout, 1, 2, 5)
    assert snap.set_label == "Set 3 of 3"
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.set_index = 0
