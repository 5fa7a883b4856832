from kivymd.app import MDApp
from kivymd.uix.screen import MDScreen
from kivymd.uix.list import TwoLineListItem
from kivymd.toast import toast
from kivy.properties import StringProperty
import logging

from backend.errors import FetchError


class HomeScreen(MDScreen):
    """List the saved workouts; tapping one starts playback."""

    empty_text = StringProperty("")

    def on_pre_enter(self, *args):
        self.populate()
        return super().on_pre_enter(*args)

    def populate(self) -> None:
        lst = self.ids.get("workout_list")
        if not lst:
            return
        lst.clear_widgets()
        app = MDApp.get_running_app()
        try:
            workouts = app.store.list_workouts()
        except FetchError as exc:
            logging.exception("Could not list workouts")
            toast(str(exc))
            workouts = []
        self.empty_text = "" if workouts else "No workouts yet"
        for workout in workouts:
            count = len(workout.exercises)
            item = TwoLineListItem(
                text=workout.title,
                secondary_text=f"{count} exercise{'s' if count != 1 else ''}, "
                f"{workout.total_sets} sets",
                on_release=lambda _, wid=workout.id: self.start(wid),
            )
            lst.add_widget(item)

    def start(self, workout_id: int) -> None:
        app = MDApp.get_running_app()
        if app:
            app.start_workout(workout_id)
