"""Read-only views of a workout player, one class per playback mode.

Screens receive one of these objects and render it.  Each class only
carries the fields that make sense in its mode, so a rest countdown cannot
be read outside a rest interval.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from backend.models import Exercise, Workout


class Mode(Enum):
    LOADING = "loading"
    ACTIVE_SET = "active_set"
    RESTING = "resting"
    COMPLETED = "completed"
    FAILED = "failed"


def format_clock(seconds: float) -> str:
    """Return ``seconds`` as ``MM:SS``."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


@dataclass(frozen=True)
class LoadingSnapshot:
    mode: ClassVar[Mode] = Mode.LOADING

    workout_id: int
    elapsed_seconds: int = 0


@dataclass(frozen=True)
class ActiveSetSnapshot:
    """The user is performing ``set_index`` of ``exercise_index``."""

    mode: ClassVar[Mode] = Mode.ACTIVE_SET

    workout: Workout
    exercise_index: int
    set_index: int
    elapsed_seconds: int

    @property
    def exercise(self) -> Exercise:
        return self.workout.exercises[self.exercise_index]

    @property
    def set_label(self) -> str:
        return f"Set {self.set_index + 1} of {self.exercise.sets}"


@dataclass(frozen=True)
class RestingSnapshot:
    """A rest interval is counting down.

    ``exercise_index`` still points at the exercise just performed and
    ``set_index`` has already moved past the completed set, so it may equal
    the exercise's set count when the next step is a new exercise.
    """

    mode: ClassVar[Mode] = Mode.RESTING

    workout: Workout
    exercise_index: int
    set_index: int
    rest_remaining: int
    elapsed_seconds: int

    @property
    def finished_exercise(self) -> Exercise:
        return self.workout.exercises[self.exercise_index]

    @property
    def changes_exercise(self) -> bool:
        return self.set_index >= self.finished_exercise.sets

    @property
    def upcoming_exercise(self) -> Exercise:
        if self.changes_exercise:
            return self.workout.exercises[self.exercise_index + 1]
        return self.finished_exercise

    @property
    def upcoming_set_index(self) -> int:
        return 0 if self.changes_exercise else self.set_index

    @property
    def upcoming_label(self) -> str:
        ex = self.upcoming_exercise
        return f"{ex.name} set {self.upcoming_set_index + 1} of {ex.sets}"


@dataclass(frozen=True)
class CompletedSnapshot:
    """The workout finished; ``recording_error`` is set if saving failed."""

    mode: ClassVar[Mode] = Mode.COMPLETED

    workout: Workout
    elapsed_seconds: int
    recording_error: str | None = None


@dataclass(frozen=True)
class FailedSnapshot:
    """The routine could not be loaded; the session cannot continue."""

    mode: ClassVar[Mode] = Mode.FAILED

    workout_id: int
    error: str


Snapshot = Union[
    LoadingSnapshot,
    ActiveSetSnapshot,
    RestingSnapshot,
    CompletedSnapshot,
    FailedSnapshot,
]
