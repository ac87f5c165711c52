"""Domain enumerations package.

This package contains all enumerations used across the domain layer,
organized into logical modules for maintainability.
"""

from .task import TaskPriority, TaskStatus
from .user import UserRole

__all__ = [
    # Task enums
    "TaskStatus",
    "TaskPriority",
    # Account enums
    "UserRole",
]
