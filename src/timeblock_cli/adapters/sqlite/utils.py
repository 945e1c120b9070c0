"""Row and statement helpers for the ``tasks`` table."""

from __future__ import annotations

import sqlite3
from collections.abc import Mapping
from typing import Any

from timeblock_cli.adapters.sqlite.schema import COLUMN_TO_FIELD, FIELD_TO_COLUMN
from timeblock_cli.models import Task


def row_to_task(row: sqlite3.Row) -> Task:
    """Build a Task from a row selected with the ``task_*`` column names."""
    return Task(**{COLUMN_TO_FIELD[column]: row[column] for column in row.keys()})


def set_clause(fields: Mapping[str, Any]) -> tuple[str, list[Any]]:
    """``UPDATE ... SET`` fragment and its parameters.

    Fields whose value is None are left out, so a partial update only
    touches the columns it names.
    """
    present = {name: value for name, value in fields.items() if value is not None}
    clause = ", ".join(f"{FIELD_TO_COLUMN[name]} = ?" for name in present)
    return clause, list(present.values())
