"""Database schema definitions for the local task store."""

from __future__ import annotations

# Tasks table - one row per time block
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    task_id INTEGER PRIMARY KEY AUTOINCREMENT,
    task_name VARCHAR(255) NOT NULL,
    task_time_start TIME,
    task_time_end TIME,
    task_color CHAR(7) NOT NULL
)
"""

# Listing is always ordered by start time
CREATE_TASKS_START_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_tasks_time_start ON tasks(task_time_start)"
)

ALL_TABLES = [CREATE_TASKS_TABLE]

ALL_INDEXES = [CREATE_TASKS_START_INDEX]

# Column name -> model field name
COLUMN_TO_FIELD = {
    "task_id": "id",
    "task_name": "name",
    "task_time_start": "start",
    "task_time_end": "end",
    "task_color": "color",
}

FIELD_TO_COLUMN = {field: column for column, field in COLUMN_TO_FIELD.items()}
