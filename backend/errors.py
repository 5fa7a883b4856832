"""Exceptions raised by the data-access layer and the workout player."""


class PlayerError(Exception):
    """Base class for workout playback failures."""


class FetchError(PlayerError):
    """The routine could not be loaded from the store."""


class WorkoutNotFoundError(FetchError):
    """No workout exists with the requested id."""

    def __init__(self, workout_id):
        self.workout_id = workout_id
        super().__init__(f"Workout '{workout_id}' not found")


class RecordingError(PlayerError):
    """The completed-workout record could not be written."""
