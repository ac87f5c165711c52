"""Test data factories and builders.

Provides reusable factory classes for creating test data with sensible defaults
and easy customization.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

from domain.enums import TaskPriority, TaskStatus, UserRole
from integration.models import SubtaskDto, TaskCommentDto, TaskDto, UserDto


# ============================================================================
# USER FACTORY
# ============================================================================


class UserDtoFactory:
    """Factory for creating UserDto accounts with sensible defaults."""

    @staticmethod
    def create(
        user_id: str | None = None,
        name: str = "Test User",
        email: str | None = None,
        password_hash: str = "not-a-real-hash",  # pragma: allowlist secret
        role: UserRole = UserRole.EMPLOYEE,
    ) -> UserDto:
        """Create a UserDto with defaults that can be overridden."""
        user_id = user_id or uuid4().hex
        now: datetime = datetime.now(UTC)
        return UserDto(
            id=user_id,
            name=name,
            email=email or f"{user_id}@example.com",
            password_hash=password_hash,
            role=role,
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def create_admin(**kwargs: Any) -> UserDto:
        """Create an administrator account."""
        kwargs.setdefault("name", "Ada Admin")
        return UserDtoFactory.create(role=UserRole.ADMIN, **kwargs)

    @staticmethod
    def create_employee(**kwargs: Any) -> UserDto:
        """Create an employee account."""
        kwargs.setdefault("name", "Eve Employee")
        return UserDtoFactory.create(role=UserRole.EMPLOYEE, **kwargs)


# ============================================================================
# TASK FACTORY
# ============================================================================


class TaskDtoFactory:
    """Factory for creating TaskDto documents with sensible defaults."""

    @staticmethod
    def create(
        task_id: str | None = None,
        title: str = "Test Task",
        description: str = "Test task description",
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: datetime | None = None,
        created_by: str | None = None,
        assigned_to: str | None = None,
        comments: list[TaskCommentDto] | None = None,
        subtasks: list[SubtaskDto] | None = None,
        created_at: datetime | None = None,
    ) -> TaskDto:
        """Create a TaskDto with defaults that can be overridden."""
        created_at = created_at or datetime.now(UTC)
        return TaskDto(
            id=task_id or uuid4().hex,
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=due_date,
            created_by=created_by,
            assigned_to=assigned_to,
            comments=list(comments or []),
            subtasks=list(subtasks or []),
            created_at=created_at,
            updated_at=created_at,
        )

    @staticmethod
    def create_many(count: int, **kwargs: Any) -> list[TaskDto]:
        """Create multiple tasks with incrementing titles and creation times."""
        base: datetime = datetime.now(UTC)
        return [TaskDtoFactory.create(title=f"Test Task {i + 1}", created_at=base + timedelta(seconds=i), **kwargs) for i in range(count)]

    @staticmethod
    def create_overdue(**kwargs: Any) -> TaskDto:
        """Create a task whose due date is a day in the past."""
        return TaskDtoFactory.create(due_date=datetime.now(UTC) - timedelta(days=1), **kwargs)

    @staticmethod
    def create_with_subtasks(*titles: str, **kwargs: Any) -> TaskDto:
        """Create a task carrying one not-yet-completed subtask per title."""
        subtasks = [SubtaskDto(id=f"sub-{i}", title=title) for i, title in enumerate(titles)]
        return TaskDtoFactory.create(subtasks=subtasks, **kwargs)
