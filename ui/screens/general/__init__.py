"""Screens not directly part of the workout session loop."""

from .home_screen import HomeScreen
from .settings_screen import SettingsScreen

__all__ = [
    "HomeScreen",
    "SettingsScreen",
]
