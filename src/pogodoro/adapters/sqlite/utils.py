"""Utility functions for SQLite adapter."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from pogodoro.models.exceptions import StoreUnavailableError


def now_iso() -> str:
    """Get current timestamp in ISO format.

    Returns:
        ISO format datetime string
    """
    return datetime.now(UTC).isoformat()


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary.

    Args:
        row: sqlite3.Row object

    Returns:
        Dictionary with column names as keys
    """
    if row is None:
        return {}
    return dict(row)


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse datetime from various formats.

    Naive values are assumed to be UTC.

    Args:
        value: String, datetime object, or None

    Returns:
        Timezone-aware datetime object or None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


@contextmanager
def translate_sqlite_errors(action: str) -> Iterator[None]:
    """Re-raise driver errors as StoreUnavailableError.

    Args:
        action: Short description used in the error message
    """
    try:
        yield
    except sqlite3.Error as e:
        raise StoreUnavailableError(f"Task store unavailable while {action}: {e}") from e
