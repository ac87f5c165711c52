"""Test fixtures package."""

from .factories import TaskDtoFactory, UserDtoFactory

__all__ = [
    "TaskDtoFactory",
    "UserDtoFactory",
]
