from kivymd.uix.screen import MDScreen
from kivymd.app import MDApp
from kivymd.uix.dialog import MDDialog
from kivymd.uix.button import MDFlatButton
from kivy.properties import StringProperty
from kivy.clock import Clock

from backend.snapshots import ActiveSetSnapshot, format_clock


class WorkoutActiveScreen(MDScreen):
    """Screen shown while the user performs a set.

    The screen only renders :class:`ActiveSetSnapshot` objects and forwards
    the "set done" and "close" taps to the running player.
    """

    exercise_name = StringProperty("")
    set_info = StringProperty("")
    target_info = StringProperty("")
    progress_info = StringProperty("")
    formatted_time = StringProperty("00:00")
    _event = None

    def render(self, snapshot: ActiveSetSnapshot) -> None:
        exercise = snapshot.exercise
        self.exercise_name = exercise.name
        self.set_info = snapshot.set_label
        self.target_info = f"{exercise.reps} reps" + (
            f" @ {exercise.weight:g} kg" if exercise.weight else ""
        )
        self.progress_info = (
            f"Exercise {snapshot.exercise_index + 1} of "
            f"{len(snapshot.workout.exercises)}"
        )
        self.formatted_time = format_clock(snapshot.elapsed_seconds)

    def on_pre_enter(self, *args):
        self._refresh(0)
        if not self._event:
            self._event = Clock.schedule_interval(self._refresh, 0.5)
        return super().on_pre_enter(*args)

    def on_leave(self, *args):
        self.stop_timer()
        return super().on_leave(*args)

    def stop_timer(self, *args):
        if self._event:
            self._event.cancel()
            self._event = None

    def _refresh(self, dt):
        app = MDApp.get_running_app()
        player = getattr(app, "player", None) if app else None
        if player is None or player.is_closed:
            return
        snapshot = player.snapshot()
        if isinstance(snapshot, ActiveSetSnapshot):
            self.render(snapshot)

    def complete_set(self):
        app = MDApp.get_running_app()
        player = getattr(app, "player", None) if app else None
        if player:
            player.set_completed()

    def confirm_close(self):
        if not getattr(self, "_close_dialog", None):
            self._close_dialog = MDDialog(
                text="Stop this workout? It will not be saved.",
                buttons=[
                    MDFlatButton(
                        text="Cancel", on_release=lambda *_: self._close_dialog.dismiss()
                    ),
                    MDFlatButton(text="Stop", on_release=self._perform_close),
                ],
            )
        self._close_dialog.open()

    def _perform_close(self, *args):
        self._close_dialog.dismiss()
        self.stop_timer()
        app = MDApp.get_running_app()
        if app:
            app.close_player()
