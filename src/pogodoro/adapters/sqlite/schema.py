"""Database schema definitions for the local SQLite task store."""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 2

# Tasks table - one row per task, soft-deleted through `completed`
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY,
    desc TEXT NOT NULL,
    work_secs INTEGER NOT NULL,
    short_break_secs INTEGER NOT NULL,
    long_break_secs INTEGER NOT NULL,
    pomos_finished INTEGER NOT NULL DEFAULT 0,
    completed BOOLEAN NOT NULL DEFAULT 0
)
"""

# Completion timestamp, added with the cycle log
ADD_TASKS_COMPLETED_AT = "ALTER TABLE tasks ADD COLUMN completed_at DATETIME"

# Cycles table - append-only log of credited pomodoros
CREATE_CYCLES_TABLE = """
CREATE TABLE IF NOT EXISTS cycles (
    id INTEGER PRIMARY KEY,
    task_id INTEGER NOT NULL,
    created_at DATETIME NOT NULL,
    FOREIGN KEY (task_id) REFERENCES tasks(id)
)
"""

# Indexes for performance

CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_completed ON tasks(completed)",
]

CREATE_CYCLE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_cycles_task ON cycles(task_id)",
    "CREATE INDEX IF NOT EXISTS idx_cycles_created ON cycles(created_at)",
]
