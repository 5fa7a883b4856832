"""Plain data objects shared by the routine store, the recorder and the player."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Exercise:
    """One exercise of a workout, performed ``sets`` times."""

    id: int
    workout_id: int
    name: str
    sets: int
    reps: int
    weight: float | None = None

    def describe(self) -> str:
        """Return ``"3 x 10 @ 40 kg"`` style text for display."""

        text = f"{self.sets} x {self.reps}"
        if self.weight:
            text += f" @ {self.weight:g} kg"
        return text


@dataclass(frozen=True)
class Workout:
    """A routine and its exercises in execution order."""

    id: int
    title: str
    exercises: tuple[Exercise, ...] = field(default_factory=tuple)

    @property
    def total_sets(self) -> int:
        return sum(ex.sets for ex in self.exercises)


@dataclass(frozen=True)
class CompletedWorkoutRecord:
    """Persisted fact that a workout session reached its end."""

    id: int
    workout_id: int
    duration: int
    completed_at: float


@dataclass(frozen=True)
class WeeklyTotals:
    """Completed workouts and time trained since the most recent Monday."""

    since: float
    total_workouts: int
    total_seconds: int

    @property
    def total_hours(self) -> int:
        # whole hours, rounded like the stats card shows them
        return round(self.total_seconds / 3600)
