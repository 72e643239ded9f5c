"""Pogodoro - a terminal pomodoro timer with persisted tasks."""

__version__ = "0.3.0"
