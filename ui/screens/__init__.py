"""UI screen modules for the workout player."""

from .session import (
    RestScreen,
    WorkoutActiveScreen,
    WorkoutSummaryScreen,
)
from .general import (
    HomeScreen,
    SettingsScreen,
)

__all__ = [
    "HomeScreen",
    "RestScreen",
    "SettingsScreen",
    "WorkoutActiveScreen",
    "WorkoutSummaryScreen",
]
