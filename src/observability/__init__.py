"""Observability utilities and metrics."""

from .metrics import (
    auth_failures,
    task_comments_added,
    task_processing_time,
    tasks_created,
    tasks_deleted,
    tasks_failed,
    tasks_updated,
    tokens_issued,
    user_role_changes,
    users_deleted,
    users_registered,
)

__all__ = [
    # Task metrics
    "tasks_created",
    "tasks_updated",
    "tasks_deleted",
    "tasks_failed",
    "task_comments_added",
    "task_processing_time",
    # User metrics
    "users_registered",
    "users_deleted",
    "user_role_changes",
    # Auth metrics
    "tokens_issued",
    "auth_failures",
]
