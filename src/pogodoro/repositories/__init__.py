"""Repository interfaces for Pogodoro.

This package contains the abstract base class that defines the contract for
task persistence. This is the "Port" in the Hexagonal Architecture.

The implementation (Adapter) lives in pogodoro.adapters.sqlite.
"""

from .repository import TaskRepository

__all__ = [
    "TaskRepository",
]
