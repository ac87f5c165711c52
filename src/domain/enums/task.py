"""Task-related enumerations.

Values are persisted verbatim and travel over the wire, so they must stay
in sync with what board clients send (`inprogress` has no separator).
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Board column a task sits in."""

    TODO = "todo"
    IN_PROGRESS = "inprogress"
    DONE = "done"


class TaskPriority(str, Enum):
    """Priority levels for tasks."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
