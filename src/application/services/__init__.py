"""Application services package."""

from .task_access_policy import TaskAccessPolicy
from .task_presenter import expand_task_async, expand_tasks_async

__all__ = [
    "TaskAccessPolicy",
    "expand_task_async",
    "expand_tasks_async",
]
