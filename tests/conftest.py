"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, database and
log locations of the user running them.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from pogodoro.adapters.sqlite import SqliteTaskRepository
from pogodoro.adapters.sqlite.connection import DatabaseConnection
from pogodoro.config import ConfigManager


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def isolated_log_dir(tmp_path_factory):
    """Send the application log into a temporary directory."""
    log_dir = tmp_path_factory.mktemp("logs")
    with patch("pogodoro.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Install a ConfigManager backed by *tmp_path* as the global one.

    Its database lives at ``tmp_path / "records.db"``.
    """
    manager = ConfigManager(config_dir=tmp_path / "config")
    manager.set("storage.db_path", str(tmp_path / "records.db"))
    monkeypatch.setattr("pogodoro.config._config_manager", manager)
    return manager


@pytest.fixture(autouse=True)
def reset_db_singleton():
    """Close the process-wide SQLite connection after each test."""
    yield
    DatabaseConnection.close_connection()
    DatabaseConnection._instance = None


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@pytest.fixture()
def repo(isolated_config) -> SqliteTaskRepository:
    """Real SQLite task store at the configured temporary path."""
    return SqliteTaskRepository(isolated_config.db_path)
