"""Task data models."""

from pydantic import BaseModel, Field


class Task(BaseModel):
    """A scheduled block of time within the day.

    Attributes:
        id: Storage-assigned identifier, stable for the task's lifetime
        name: Display label
        start: Start time-of-day (``HH:MM``, inclusive)
        end: End time-of-day (``HH:MM``, exclusive)
        color: Color code (e.g. "#FF5733")

    Rows are read back as stored; length rules apply to TaskCreate and
    TaskUpdate only.
    """

    id: int
    name: str
    start: str
    end: str
    color: str


class TaskCreate(BaseModel):
    """Model for creating a task or overwriting all of its fields.

    Attributes:
        name: Display label (required)
        start: Start time-of-day
        end: End time-of-day
        color: 7-character color code
    """

    name: str = Field(min_length=1)
    start: str
    end: str
    color: str = Field(min_length=7, max_length=7)


class TaskUpdate(BaseModel):
    """Model for a partial task update.

    All fields are optional - only provided fields will be updated.
    """

    name: str | None = Field(default=None, min_length=1)
    start: str | None = None
    end: str | None = None
    color: str | None = Field(default=None, min_length=7, max_length=7)
