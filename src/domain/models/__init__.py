"""Domain value objects for the task board.

These are immutable value objects that encapsulate access and mutation
concepts shared by the application and integration layers.
"""

from .principal import Principal
from .task_mutation import TaskMutation
from .task_scope import TaskScope

__all__ = [
    "Principal",
    "TaskMutation",
    "TaskScope",
]
