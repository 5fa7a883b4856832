from kivymd.app import MDApp
from kivymd.uix.screen import MDScreen
from kivymd.uix.dialog import MDDialog
from kivymd.uix.button import MDFlatButton
from kivy.properties import StringProperty, ListProperty

from backend.snapshots import RestingSnapshot, format_clock


class RestScreen(MDScreen):
    """Screen shown between sets with the rest countdown.

    The countdown itself is owned by the player; every tick produces a new
    :class:`RestingSnapshot` which is passed to :meth:`render`.
    """

    timer_label = StringProperty("00:00")
    session_time_label = StringProperty("00:00")
    finished_exercise_name = StringProperty("")
    next_exercise_name = StringProperty("")
    next_set_info = StringProperty("")
    rest_time_info = StringProperty("")
    timer_color = ListProperty([1, 0, 0, 1])

    def render(self, snapshot: RestingSnapshot) -> None:
        self.timer_label = format_clock(snapshot.rest_remaining)
        self.session_time_label = format_clock(snapshot.elapsed_seconds)
        self.finished_exercise_name = snapshot.finished_exercise.name
        upcoming = snapshot.upcoming_exercise
        self.next_exercise_name = upcoming.name
        self.next_set_info = f"set {snapshot.upcoming_set_index + 1} of {upcoming.sets}"
        self.rest_time_info = (
            "Next exercise" if snapshot.changes_exercise else "Next set"
        )
        # turn green for the last few seconds
        self.timer_color = (0, 1, 0, 1) if snapshot.rest_remaining <= 5 else (1, 0, 0, 1)

    def on_pre_enter(self, *args):
        app = MDApp.get_running_app()
        player = getattr(app, "player", None) if app else None
        if player and not player.is_closed:
            snapshot = player.snapshot()
            if isinstance(snapshot, RestingSnapshot):
                self.render(snapshot)
        return super().on_pre_enter(*args)

    def skip_rest(self):
        app = MDApp.get_running_app()
        player = getattr(app, "player", None) if app else None
        if player:
            player.skip_rest()

    def on_touch_down(self, touch):
        label = self.ids.get("timer_label")
        if label and label.collide_point(*touch.pos):
            self.skip_rest()
            return True
        return super().on_touch_down(touch)

    def confirm_close(self):
        dialog = None

        def do_close(*_args):
            dialog.dismiss()
            app = MDApp.get_running_app()
            if app:
                app.close_player()

        dialog = MDDialog(
            title="Stop Workout?",
            text="Your progress will not be saved.",
            buttons=[
                MDFlatButton(text="Cancel", on_release=lambda *_: dialog.dismiss()),
                MDFlatButton(text="Stop", on_release=do_close),
            ],
        )
        dialog.open()
