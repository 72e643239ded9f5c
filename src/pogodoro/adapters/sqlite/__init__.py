"""SQLite adapter module - Local database storage implementation."""

from pogodoro.adapters.sqlite.connection import DatabaseConnection, get_connection
from pogodoro.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "DatabaseConnection",
    "SqliteTaskRepository",
    "get_connection",
]
