"""Tests for SQLite adapter helpers."""

from __future__ import annotations

import sqlite3

from timeblock_cli.adapters.sqlite.utils import row_to_task, set_clause
from timeblock_cli.models import Task


def test_row_to_task_maps_columns_to_fields():
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    row = conn.execute(
        "SELECT 1 AS task_id, 'Focus' AS task_name, '09:00' AS task_time_start, "
        "'10:00' AS task_time_end, '#ffffff' AS task_color"
    ).fetchone()

    assert row_to_task(row) == Task(
        id=1, name="Focus", start="09:00", end="10:00", color="#ffffff"
    )
    conn.close()


def test_set_clause_skips_none():
    clause, params = set_clause(
        {"name": None, "start": "09:30", "end": "10:30", "color": None}
    )

    assert clause == "task_time_start = ?, task_time_end = ?"
    assert params == ["09:30", "10:30"]


def test_set_clause_empty():
    assert set_clause({"name": None}) == ("", [])
