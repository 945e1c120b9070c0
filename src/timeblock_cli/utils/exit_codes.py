"""
Exit codes for timeblock-cli.

Scripts can tell a rejected schedule change (7) apart from a missing task
(5), bad input (2) or a broken database (8).
"""

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2
ERROR_NOT_FOUND = 5
ERROR_OVERLAP = 7
ERROR_STORAGE = 8

# code -> (name, description)
_EXIT_CODES: dict[int, tuple[str, str]] = {
    SUCCESS: ("SUCCESS", "Command completed"),
    ERROR_GENERAL: ("ERROR_GENERAL", "Unexpected failure"),
    ERROR_INVALID_ARGS: ("ERROR_INVALID_ARGS", "Malformed time, interval or setting"),
    ERROR_NOT_FOUND: ("ERROR_NOT_FOUND", "No task with that ID"),
    ERROR_OVERLAP: (
        "ERROR_OVERLAP",
        "Interval overlaps an existing task - adjust the times and retry",
    ),
    ERROR_STORAGE: (
        "ERROR_STORAGE",
        "Task database unavailable - retry or check the database file",
    ),
}


def get_exit_code_name(code: int) -> str:
    """Symbolic name of an exit code, e.g. ``ERROR_OVERLAP``."""
    entry = _EXIT_CODES.get(code)
    return entry[0] if entry else f"UNKNOWN({code})"


def get_exit_code_description(code: int) -> str:
    """One-line explanation of an exit code."""
    entry = _EXIT_CODES.get(code)
    return entry[1] if entry else "Unknown error"
