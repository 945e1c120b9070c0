"""Time-of-day arithmetic and logical-day classification.

Times are zero-padded ``HH:MM`` strings. Arithmetic happens on minute
offsets in ``[0, 1440)``; results are formatted back to ``HH:MM`` with
midnight wraparound in both directions.

The logical day starts at 06:00: a time before the cutoff belongs to the
tail of the previous logical day when deciding which tasks come "after"
another one during a shift.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from timeblock_cli.models import Task

MINUTES_PER_DAY = 24 * 60
HALF_DAY = MINUTES_PER_DAY // 2

# 06:00
DAY_START_CUTOFF = 6 * 60

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_INT_RE = re.compile(r"[+-]?[0-9]+")


def to_minutes(value: str) -> int:
    """Convert ``HH:MM`` to minutes since midnight.

    Malformed input never raises: a value that does not split into exactly
    two parts is 0, and a non-numeric part counts as 0 on its own.

    Args:
        value: Time-of-day string

    Returns:
        ``hour * 60 + minute``
    """
    parts = value.split(":")
    if len(parts) != 2:
        return 0
    hours = _to_int(parts[0])
    minutes = _to_int(parts[1])
    return hours * 60 + minutes


def _to_int(part: str) -> int:
    # ASCII digits only: no padding, "_" separators or other scripts
    if _INT_RE.fullmatch(part) is None:
        return 0
    return int(part)


def to_time(minutes: int) -> str:
    """Format a minute offset as ``HH:MM``, wrapping modulo one day.

    Python's ``%`` is a true modulo, so ``-10`` becomes ``23:50``.
    """
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def shift_time(value: str, delta: int) -> str:
    """Add a signed number of minutes to a time-of-day."""
    return to_time(to_minutes(value) + delta)


def normalize_delta(diff: int) -> int:
    """Fold a raw minute difference into ``(-720, 720]``.

    A jump of more than half a day is read as the short change across
    midnight: 23:50 -> 00:10 is +20, not -1420.
    """
    if diff > HALF_DAY:
        return diff - MINUTES_PER_DAY
    if diff < -HALF_DAY:
        return diff + MINUTES_PER_DAY
    return diff


def shift_delta(original_end: str, new_end: str) -> int:
    """Signed number of minutes an end time moved by."""
    return normalize_delta(to_minutes(new_end) - to_minutes(original_end))


def logical_minutes(minutes: int, cutoff: int = DAY_START_CUTOFF) -> int:
    """Position of a time within the logical day.

    Times before ``cutoff`` are pushed past midnight (``+1440``) so that
    early-morning tasks sort after late-evening ones.
    """
    if minutes < cutoff:
        return minutes + MINUTES_PER_DAY
    return minutes


def tasks_after(
    tasks: Iterable[Task], reference_end: str, cutoff: int = DAY_START_CUTOFF
) -> list[Task]:
    """Tasks that logically start at or after ``reference_end``."""
    reference = logical_minutes(to_minutes(reference_end), cutoff)
    return [
        task
        for task in tasks
        if logical_minutes(to_minutes(task.start), cutoff) >= reference
    ]


def is_valid_time(value: str) -> bool:
    """Strict ``HH:MM`` check (00-23 hours, 00-59 minutes)."""
    return bool(_TIME_RE.match(value))
