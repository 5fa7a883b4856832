"""Playback of a workout routine.

:class:`WorkoutPlayer` walks the user through every set of every exercise,
inserting a rest interval between sets, and writes a single completion
record once the last set is done.

All input arrives as small event objects that are handled one at a time
from a FIFO queue: the routine fetch result, rest timer ticks and the
user's intents.  An event posted while another one is being handled (for
example a timer that expires synchronously) waits in the queue, so a
transition is never interleaved with another.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable

from backend import settings
from backend.errors import FetchError, RecordingError
from backend.models import Exercise, Workout
from backend.rest_timer import RestTimer
from backend.snapshots import (
    ActiveSetSnapshot,
    CompletedSnapshot,
    FailedSnapshot,
    LoadingSnapshot,
    Mode,
    RestingSnapshot,
    Snapshot,
)


# ----------------------------------------------------------------------
# Events
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class WorkoutLoaded:
    workout: Workout


@dataclass(frozen=True)
class LoadFailed:
    error: str


@dataclass(frozen=True)
class SetCompleted:
    pass


@dataclass(frozen=True)
class SkipRest:
    pass


@dataclass(frozen=True)
class RestTicked:
    token: int
    remaining: int


@dataclass(frozen=True)
class RestExpired:
    token: int


@dataclass(frozen=True)
class Close:
    pass


class WorkoutPlayer:
    """Session controller for one playback of a workout.

    ``store`` must provide ``fetch_workout(workout_id)`` and ``recorder``
    must provide ``record_completion(workout_id, duration_seconds,
    completed_at)``.  Screens read state through :meth:`snapshot` (or a
    listener registered with :meth:`bind`) and drive the session with
    :meth:`set_completed`, :meth:`skip_rest` and :meth:`close`.
    """

    def __init__(
        self,
        workout_id,
        store,
        recorder,
        rest_duration: int | None = None,
        scheduler=None,
        timer: RestTimer | None = None,
    ):
        if workout_id is None or workout_id == "":
            raise ValueError("A workout id is required to start playback")
        self.workout_id = workout_id
        self.store = store
        self.recorder = recorder
        if rest_duration is None:
            rest_duration = settings.get_rest_duration()
        self.rest_duration = max(0, int(rest_duration))
        self.timer = timer or RestTimer(scheduler)

        self.mode = Mode.LOADING
        self.workout: Workout | None = None
        self.exercise_index = 0
        self.set_index = 0
        self.rest_remaining: int | None = None
        self.sets_completed = 0
        self.error: str | None = None
        self.recording_error: str | None = None
        self.started_at = time.time()
        self.completed_at: float | None = None

        self._final_elapsed: int | None = None
        self._last_elapsed = 0
        self._rest_token = 0
        self._recorded = False
        self._closed = False
        self._queue: deque = deque()
        self._dispatching = False
        self._listeners: list[Callable[[Snapshot], None]] = []
        self._handlers = {
            WorkoutLoaded: self._on_workout_loaded,
            LoadFailed: self._on_load_failed,
            SetCompleted: self._on_set_completed,
            SkipRest: self._on_skip_rest,
            RestTicked: self._on_rest_ticked,
            RestExpired: self._on_rest_expired,
            Close: self._on_close,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def current_exercise(self) -> Exercise | None:
        if self.workout and self.exercise_index < len(self.workout.exercises):
            return self.workout.exercises[self.exercise_index]
        return None

    def bind(self, callback: Callable[[Snapshot], None]) -> None:
        """Call ``callback`` with a fresh snapshot after every change."""
        self._listeners.append(callback)

    def unbind(self, callback: Callable[[Snapshot], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def load(self) -> None:
        """Fetch the routine and start the first set."""

        if self.mode is not Mode.LOADING or self._closed:
            return
        try:
            workout = self.store.fetch_workout(self.workout_id)
        except FetchError as exc:
            logging.warning("Loading workout %s failed: %s", self.workout_id, exc)
            self.dispatch(LoadFailed(str(exc)))
        else:
            self.dispatch(WorkoutLoaded(workout))

    def set_completed(self) -> None:
        self.dispatch(SetCompleted())

    def skip_rest(self) -> None:
        self.dispatch(SkipRest())

    def close(self) -> None:
        self.dispatch(Close())

    def elapsed_seconds(self) -> int:
        """Whole seconds since the session started, frozen once completed."""

        if self._final_elapsed is not None:
            return self._final_elapsed
        return self._elapsed_at(time.time())

    def snapshot(self) -> Snapshot:
        """Return the read-only view matching the current mode."""

        if self.mode is Mode.LOADING:
            return LoadingSnapshot(self.workout_id, self.elapsed_seconds())
        if self.mode is Mode.FAILED:
            return FailedSnapshot(self.workout_id, self.error or "")
        if self.mode is Mode.COMPLETED:
            return CompletedSnapshot(
                self.workout, self.elapsed_seconds(), self.recording_error
            )
        if self.mode is Mode.RESTING:
            return RestingSnapshot(
                self.workout,
                self.exercise_index,
                self.set_index,
                self.rest_remaining or 0,
                self.elapsed_seconds(),
            )
        return ActiveSetSnapshot(
            self.workout, self.exercise_index, self.set_index, self.elapsed_seconds()
        )

    def summary(self) -> str:
        """Return a short text summary of the session."""

        title = self.workout.title if self.workout else f"#{self.workout_id}"
        minutes, seconds = divmod(self.elapsed_seconds(), 60)
        total = self.workout.total_sets if self.workout else 0
        return "\n".join(
            [
                f"Workout: {title}",
                f"Status: {self.mode.value}",
                f"Sets: {self.sets_completed} of {total}",
                f"Duration: {minutes}m {seconds}s",
            ]
        )

    # ------------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------------

    def dispatch(self, event) -> None:
        """Queue ``event`` and handle queued events in order."""

        if self._closed:
            logging.debug("Player closed, dropping %s", type(event).__name__)
            return
        self._queue.append(event)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                current = self._queue.popleft()
                if self._closed:
                    self._queue.clear()
                    break
                changed = self._handlers[type(current)](current)
                if changed and not self._closed:
                    self._notify()
        finally:
            self._dispatching = False

    def _notify(self) -> None:
        snap = self.snapshot()
        for callback in list(self._listeners):
            callback(snap)

    def _ignore(self, event) -> bool:
        logging.debug(
            "Ignoring %s while %s", type(event).__name__, self.mode.value
        )
        return False

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _on_workout_loaded(self, event: WorkoutLoaded) -> bool:
        if self.mode is not Mode.LOADING:
            return self._ignore(event)
        self.workout = event.workout
        self.exercise_index = 0
        self.set_index = 0
        if not self.workout.exercises:
            logging.info("Workout %s has no exercises, completing", self.workout_id)
            self._complete(elapsed=0)
        else:
            self.mode = Mode.ACTIVE_SET
        return True

    def _on_load_failed(self, event: LoadFailed) -> bool:
        if self.mode is not Mode.LOADING:
            return self._ignore(event)
        self.mode = Mode.FAILED
        self.error = event.error
        return True

    def _on_set_completed(self, event: SetCompleted) -> bool:
        if self.mode is not Mode.ACTIVE_SET:
            return self._ignore(event)
        exercise = self.current_exercise
        self.sets_completed += 1
        self.set_index += 1
        last_set = self.set_index >= exercise.sets
        last_exercise = self.exercise_index >= len(self.workout.exercises) - 1
        logging.debug(
            "Set done: exercise %d set %d of %d",
            self.exercise_index,
            self.set_index,
            exercise.sets,
        )
        if last_set and last_exercise:
            self._complete()
        else:
            self._start_rest()
        return True

    def _on_skip_rest(self, event: SkipRest) -> bool:
        if self.mode is not Mode.RESTING:
            return self._ignore(event)
        self._end_rest()
        return True

    def _on_rest_ticked(self, event: RestTicked) -> bool:
        if self.mode is not Mode.RESTING or event.token != self._rest_token:
            return self._ignore(event)
        self.rest_remaining = event.remaining
        return True

    def _on_rest_expired(self, event: RestExpired) -> bool:
        if self.mode is not Mode.RESTING or event.token != self._rest_token:
            return self._ignore(event)
        self._end_rest()
        return True

    def _on_close(self, event: Close) -> bool:
        self._stop_timer()
        self._closed = True
        self._listeners.clear()
        if self.mode is not Mode.COMPLETED:
            logging.info(
                "Workout %s abandoned while %s", self.workout_id, self.mode.value
            )
        return False

    def _start_rest(self) -> None:
        self.mode = Mode.RESTING
        self._rest_token += 1
        token = self._rest_token
        self.rest_remaining = self.rest_duration
        self.timer.start(
            self.rest_duration,
            on_tick=lambda remaining: self.dispatch(RestTicked(token, remaining)),
            on_expire=lambda: self.dispatch(RestExpired(token)),
        )

    def _end_rest(self) -> None:
        self._stop_timer()
        self.rest_remaining = None
        if self.set_index >= self.current_exercise.sets:
            self.set_index = 0
            self.exercise_index += 1
        self.mode = Mode.ACTIVE_SET

    def _stop_timer(self) -> None:
        self._rest_token += 1
        self.timer.cancel()

    def _elapsed_at(self, now: float) -> int:
        value = max(0, int(now - self.started_at), self._last_elapsed)
        self._last_elapsed = value
        return value

    def _complete(self, elapsed: int | None = None) -> None:
        if self._recorded or self.mode is Mode.COMPLETED:
            return
        self._stop_timer()
        now = time.time()
        self._final_elapsed = self._elapsed_at(now) if elapsed is None else elapsed
        self.completed_at = now
        self.rest_remaining = None
        self.exercise_index = len(self.workout.exercises)
        self.set_index = 0
        self.mode = Mode.COMPLETED
        self._recorded = True
        logging.info(
            "Workout %s completed in %ds", self.workout_id, self._final_elapsed
        )
        try:
            self.recorder.record_completion(
                self.workout.id, self._final_elapsed, self.completed_at
            )
        except RecordingError as exc:
            logging.warning("Saving completed workout failed: %s", exc)
            self.recording_error = str(exc)
        except Exception as exc:
            logging.exception("Unexpected error saving workout %s", self.workout_id)
            self.recording_error = str(exc) or type(exc).__name__
