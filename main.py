from kivymd.app import MDApp
from kivymd.toast import toast
from kivy.lang import Builder
from kivy.clock import Clock
from kivy.core.window import Window
from pathlib import Path
import logging
import os
import sys

import core
from core import (
    CompletionRecorder,
    Mode,
    RoutineStore,
    WorkoutPlayer,
    DEFAULT_DB_PATH,
)
from ui.dialogs import LoadingDialog
from ui.screens import (  # noqa: F401 - registered for main.kv
    HomeScreen,
    RestScreen,
    SettingsScreen,
    WorkoutActiveScreen,
    WorkoutSummaryScreen,
)


if os.name == "nt" or sys.platform.startswith("win"):
    Window.size = (280, 280 * (20 / 9))

# Screen that renders each playback mode
SCREEN_FOR_MODE = {
    Mode.ACTIVE_SET: "workout_active",
    Mode.RESTING: "rest",
    Mode.COMPLETED: "workout_summary",
}

# Android back button / desktop Escape
KEY_BACK = 27


class WorkoutApp(MDApp):
    player: WorkoutPlayer | None = None
    store: RoutineStore | None = None
    recorder: CompletionRecorder | None = None
    _loading_dialog: LoadingDialog | None = None

    def __init__(self, db_path: Path = DEFAULT_DB_PATH, **kwargs):
        super().__init__(**kwargs)
        self.db_path = Path(db_path)

    def build(self):
        core.ensure_schema(self.db_path)
        self.store = RoutineStore(self.db_path)
        self.recorder = CompletionRecorder(self.db_path)
        Window.bind(on_keyboard=self._on_keyboard)
        return Builder.load_file(str(Path(__file__).with_name("main.kv")))

    def start_workout(self, workout_id: int) -> None:
        """Create a :class:`WorkoutPlayer` for ``workout_id`` and load it.

        The fetch is scheduled on the next frame so the loading dialog is
        drawn before the database is read.
        """

        self.close_player(go_home=False)
        player = WorkoutPlayer(workout_id, self.store, self.recorder)
        player.bind(self.show_snapshot)
        self.player = player
        self._loading_dialog = LoadingDialog(text="Loading workout...")
        self._loading_dialog.open()
        Clock.schedule_once(lambda dt: player.load(), 0)

    def show_snapshot(self, snapshot) -> None:
        """Route ``snapshot`` to the screen that renders its mode."""

        if snapshot.mode is Mode.LOADING:
            return
        self._dismiss_loading()
        if snapshot.mode is Mode.FAILED:
            toast(f"Could not load workout: {snapshot.error}")
            self.close_player()
            return
        name = SCREEN_FOR_MODE[snapshot.mode]
        screen = self.root.get_screen(name)
        screen.render(snapshot)
        if self.root.current != name:
            self.root.current = name

    def close_player(self, go_home: bool = True) -> None:
        """Discard the running session, if any, and return home."""

        self._dismiss_loading()
        if self.player:
            self.player.close()
            self.player = None
        if go_home and self.root:
            self.root.current = "home"

    def _dismiss_loading(self) -> None:
        if self._loading_dialog:
            self._loading_dialog.dismiss()
            self._loading_dialog = None

    def _on_keyboard(self, window, key, *args):
        if key != KEY_BACK or not self.root:
            return False
        if self.player:
            self.close_player()
            return True
        if self.root.current != "home":
            self.root.current = "home"
            return True
        return False

    def on_stop(self):
        if self.player:
            logging.info("App stopping, discarding unfinished workout")
        self.close_player(go_home=False)


if __name__ == "__main__":
    WorkoutApp().run()
