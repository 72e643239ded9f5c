"""Live pomodoro timer.

This package re-exports the terminal front end from pogodoro.models.focus
for clean import paths.
"""

from pogodoro.models.focus.keyboard import KeyboardHandler
from pogodoro.models.focus.ui import TimerDisplay, show_session_summary

__all__ = [
    "TimerDisplay",
    "KeyboardHandler",
    "show_session_summary",
]
