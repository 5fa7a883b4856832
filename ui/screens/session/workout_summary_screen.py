import logging

from kivymd.app import MDApp
from kivymd.uix.screen import MDScreen
from kivymd.toast import toast
from kivy.properties import StringProperty

from backend.errors import FetchError
from backend.snapshots import CompletedSnapshot, format_clock


class WorkoutSummaryScreen(MDScreen):
    """Screen shown once the last set of a workout is done."""

    workout_title = StringProperty("")
    duration_label = StringProperty("00:00")
    sets_label = StringProperty("")
    status_label = StringProperty("")
    details_label = StringProperty("")
    goal_label = StringProperty("")

    def render(self, snapshot: CompletedSnapshot) -> None:
        self.workout_title = snapshot.workout.title
        self.duration_label = format_clock(snapshot.elapsed_seconds)
        self.sets_label = f"{snapshot.workout.total_sets} sets"
        if snapshot.recording_error:
            self.status_label = "Workout could not be saved"
            toast(f"Save failed: {snapshot.recording_error}")
        else:
            self.status_label = "Workout saved"

    def on_pre_enter(self, *args):
        self.show_details()
        return super().on_pre_enter(*args)

    def show_details(self) -> None:
        """Fill the session summary and this week's goal progress."""
        app = MDApp.get_running_app()
        player = getattr(app, "player", None) if app else None
        recorder = getattr(app, "recorder", None) if app else None
        self.details_label = player.summary() if player else ""
        if recorder is None:
            self.goal_label = ""
            return
        try:
            progress = recorder.goal_progress()
        except FetchError:
            logging.exception("Could not load weekly progress")
            self.goal_label = ""
            return
        self.goal_label = (
            f"This week: {progress['total_workouts']} of "
            f"{progress['workout_goal']} workouts, "
            f"{progress['total_hours']} of {progress['hour_goal']} hours"
        )

    def finish(self):
        app = MDApp.get_running_app()
        if app:
            app.close_player()
