"""Screen for modifying app settings."""

from kivymd.app import MDApp
from kivymd.uix.screen import MDScreen
from kivymd.toast import toast
from kivy.properties import StringProperty

from backend import settings as app_settings


class SettingsScreen(MDScreen):
    """Display and persist the rest interval and weekly goals."""

    return_to = StringProperty("home")
    """Name of the screen to return to when leaving settings."""

    _FIELDS = {
        "rest_duration": "rest_field",
        "workout_goal": "workout_goal_field",
        "hour_goal": "hour_goal_field",
    }

    def on_pre_enter(self, *args) -> None:
        """Populate controls from stored settings."""
        workout_goal, hour_goal = app_settings.get_goals()
        values = {
            "rest_duration": app_settings.get_rest_duration(),
            "workout_goal": workout_goal,
            "hour_goal": hour_goal,
        }
        for key, widget_id in self._FIELDS.items():
            field = self.ids.get(widget_id)
            if field:
                field.text = str(values[key])
        return super().on_pre_enter(*args)

    def save(self) -> None:
        values = {}
        for key, widget_id in self._FIELDS.items():
            field = self.ids.get(widget_id)
            if not field:
                continue
            text = field.text.strip()
            if not text.isdigit():
                field.error = True
                toast("Enter whole numbers only")
                return
            field.error = False
            values[key] = int(text)
        for key, value in values.items():
            app_settings.set_value(key, value)
        toast("Settings saved")
        self.go_back()

    def go_back(self) -> None:
        app = MDApp.get_running_app()
        if app and app.root:
            app.root.current = self.return_to
