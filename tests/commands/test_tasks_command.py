"""Tests for the task commands, run through CliRunner against a real service."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import yaml
from typer.testing import CliRunner

from timeblock_cli.commands.tasks import app
from timeblock_cli.models import StorageError
from timeblock_cli.utils import exit_codes

runner = CliRunner()


@pytest.fixture
def invoke(service):
    """Invoke the tasks app with get_task_service patched to the test service."""

    def _invoke(args: list[str], **kwargs):
        with patch(
            "timeblock_cli.commands.tasks.get_task_service", return_value=service
        ):
            return runner.invoke(app, args, **kwargs)

    return _invoke


def _rows(db_connection) -> list[tuple]:
    return [
        tuple(row)
        for row in db_connection.execute(
            "SELECT task_name, task_time_start, task_time_end FROM tasks "
            "ORDER BY task_time_start"
        )
    ]


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


class TestAdd:
    def test_add(self, invoke, db_connection):
        result = invoke(["add", "Deep work", "09:00", "10:30"])

        assert result.exit_code == 0, result.output
        assert "Task #1 created" in result.output
        assert _rows(db_connection) == [("Deep work", "09:00", "10:30")]

    def test_add_uses_color_option(self, invoke, db_connection):
        invoke(["add", "Gym", "18:00", "19:00", "--color", "#00FF00"])

        color = db_connection.execute("SELECT task_color FROM tasks").fetchone()[0]
        assert color == "#00FF00"

    def test_add_overlap_exits_with_overlap_code(self, invoke, seed, db_connection):
        seed("Meeting", "09:00", "10:00")

        result = invoke(["add", "Focus", "09:30", "11:00"])

        assert result.exit_code == exit_codes.ERROR_OVERLAP
        assert "overlaps" in result.output
        assert len(_rows(db_connection)) == 1

    def test_add_overlap_with_bracketed_name(self, invoke, db_connection):
        assert invoke(["add", "Review [/b] notes", "09:00", "10:00"]).exit_code == 0

        result = invoke(["add", "x", "09:30", "10:30"])

        assert result.exit_code == exit_codes.ERROR_OVERLAP
        # Rich may wrap the long message
        assert "'Review [/b] notes' (09:00-10:00)" in " ".join(result.output.split())
        assert len(_rows(db_connection)) == 1

    @pytest.mark.parametrize(
        "start, end",
        [("9:00", "10:00"), ("09:00", "24:00"), ("10:00", "09:00"), ("09:00", "09:00")],
    )
    def test_add_rejects_bad_interval(self, invoke, db_connection, start, end):
        result = invoke(["add", "Focus", start, end])

        assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
        assert _rows(db_connection) == []

    def test_add_rejects_bad_color(self, invoke):
        result = invoke(["add", "Focus", "09:00", "10:00", "--color", "blue"])

        assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
        assert "color" in result.output


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


class TestList:
    def test_list_empty(self, invoke):
        result = invoke(["list"])

        assert result.exit_code == 0
        assert "No tasks scheduled" in result.output

    def test_list_pretty_shows_free_time(self, invoke, seed):
        seed("Standup", "09:00", "09:15")
        seed("Review", "10:00", "11:00")

        result = invoke(["list"])

        assert result.exit_code == 0
        assert "Standup" in result.output
        assert "free 45m" in result.output
        assert "1h" in result.output

    def test_list_json(self, invoke, seed):
        seed("B", "10:00", "11:00")
        seed("A", "08:00", "09:00")

        result = invoke(["list", "--output", "json"])

        data = json.loads(result.output)
        assert [t["name"] for t in data] == ["A", "B"]
        assert set(data[0]) == {"id", "name", "start", "end", "color"}

    def test_list_yaml(self, invoke, seed):
        seed("A", "08:00", "09:00")

        result = invoke(["list", "-o", "yaml"])

        assert yaml.safe_load(result.output)[0]["start"] == "08:00"

    def test_list_table(self, invoke, seed):
        seed("Lunch", "12:00", "13:00")

        result = invoke(["list", "-o", "table"])

        assert result.exit_code == 0
        assert "Lunch" in result.output
        assert "12:00" in result.output

    def test_list_default_format_from_config(self, invoke, seed):
        from timeblock_cli.services.config_service import get_config_service

        seed("A", "08:00", "09:00")
        get_config_service().set("output.format", "json")

        result = invoke(["list"])

        assert json.loads(result.output)[0]["name"] == "A"


# ---------------------------------------------------------------------------
# edit
# ---------------------------------------------------------------------------


class TestEdit:
    def test_edit_name_only(self, invoke, seed, db_connection):
        task_id = seed("Old", "09:00", "10:00")

        result = invoke(["edit", str(task_id), "--name", "New"])

        assert result.exit_code == 0, result.output
        assert f"Task #{task_id} updated" in result.output
        assert _rows(db_connection) == [("New", "09:00", "10:00")]

    def test_edit_overlap(self, invoke, seed, db_connection):
        a = seed("A", "09:00", "10:00")
        seed("B", "10:00", "11:00")

        result = invoke(["edit", str(a), "--end", "10:30"])

        assert result.exit_code == exit_codes.ERROR_OVERLAP
        assert _rows(db_connection) == [("A", "09:00", "10:00"), ("B", "10:00", "11:00")]

    def test_edit_with_shift_moves_later_tasks(self, invoke, seed, db_connection):
        a = seed("A", "09:00", "10:00")
        seed("B", "10:00", "11:00")

        result = invoke(["edit", str(a), "--end", "10:30", "--shift"])

        assert result.exit_code == 0, result.output
        assert "Later tasks moved by +30m" in result.output
        assert _rows(db_connection) == [("A", "09:00", "10:30"), ("B", "10:30", "11:30")]

    def test_edit_shift_earlier(self, invoke, seed, db_connection):
        a = seed("A", "09:00", "10:00")
        seed("B", "10:00", "11:00")

        result = invoke(["edit", str(a), "-e", "09:45", "--shift"])

        assert "moved by -15m" in result.output
        assert _rows(db_connection) == [("A", "09:00", "09:45"), ("B", "09:45", "10:45")]

    def test_edit_shift_without_end_change(self, invoke, seed, db_connection):
        a = seed("A", "09:00", "10:00")
        seed("B", "10:00", "11:00")

        result = invoke(["edit", str(a), "--start", "09:30", "--shift"])

        assert result.exit_code == 0
        assert "moved" not in result.output
        assert _rows(db_connection) == [("A", "09:30", "10:00"), ("B", "10:00", "11:00")]

    def test_edit_missing_task(self, invoke):
        result = invoke(["edit", "42", "--name", "x"])

        assert result.exit_code == exit_codes.ERROR_NOT_FOUND
        assert "Task not found: 42" in result.output

    def test_edit_rejects_reversed_interval(self, invoke, seed):
        task_id = seed("A", "09:00", "10:00")

        result = invoke(["edit", str(task_id), "--start", "11:00"])

        assert result.exit_code == exit_codes.ERROR_INVALID_ARGS


# ---------------------------------------------------------------------------
# delete / clear
# ---------------------------------------------------------------------------


class TestDelete:
    def test_delete_force(self, invoke, seed, db_connection):
        task_id = seed("A", "09:00", "10:00")

        result = invoke(["delete", str(task_id), "--force"])

        assert result.exit_code == 0
        assert f"Task #{task_id} deleted" in result.output
        assert _rows(db_connection) == []

    def test_delete_missing_is_not_an_error(self, invoke):
        result = invoke(["delete", "99", "-f"])

        assert result.exit_code == 0
        assert "nothing deleted" in result.output

    def test_delete_confirmation_declined(self, invoke, seed, db_connection):
        seed("A", "09:00", "10:00")

        result = invoke(["delete", "1"], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert len(_rows(db_connection)) == 1

    def test_delete_confirmation_accepted(self, invoke, seed, db_connection):
        task_id = seed("A", "09:00", "10:00")

        result = invoke(["delete", str(task_id)], input="y\n")

        assert result.exit_code == 0
        assert _rows(db_connection) == []


class TestClear:
    def test_clear_force(self, invoke, seed, db_connection):
        seed("A", "09:00", "10:00")
        seed("B", "10:00", "11:00")

        result = invoke(["clear", "--force"])

        assert result.exit_code == 0
        assert "Deleted 2 task(s)" in result.output
        assert _rows(db_connection) == []

    def test_clear_declined(self, invoke, seed, db_connection):
        seed("A", "09:00", "10:00")

        result = invoke(["clear"], input="n\n")

        assert "Cancelled" in result.output
        assert len(_rows(db_connection)) == 1


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


class TestCheck:
    def test_free_interval(self, invoke, seed):
        seed("A", "09:00", "10:00")

        result = invoke(["check", "10:00", "11:00"])

        assert result.exit_code == 0
        assert "is free" in result.output

    def test_overlapping_interval(self, invoke, seed):
        seed("A", "09:00", "10:00")

        result = invoke(["check", "09:30", "10:30"])

        assert result.exit_code == exit_codes.ERROR_OVERLAP
        assert "overlaps 1 task(s)" in result.output

    def test_exclude_ignores_task_being_edited(self, invoke, seed):
        task_id = seed("A", "09:00", "10:00")

        result = invoke(["check", "09:30", "10:30", "--exclude", str(task_id)])

        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# Storage failures
# ---------------------------------------------------------------------------


def test_storage_failure_exits_with_storage_code():
    broken = MagicMock()
    broken.list_tasks = AsyncMock(side_effect=StorageError("database is locked"))

    with patch("timeblock_cli.commands.tasks.get_task_service", return_value=broken):
        result = runner.invoke(app, ["list"])

    assert result.exit_code == exit_codes.ERROR_STORAGE
    assert "database is locked" in result.output
