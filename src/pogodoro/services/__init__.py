"""Services module for Pogodoro - Business logic layer."""

from .notification_service import DesktopNotifier
from .task_service import TaskOverview, TaskService

__all__ = [
    "TaskService",
    "TaskOverview",
    "DesktopNotifier",
]
