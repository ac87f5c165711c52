"""Integration event package exports.

Outgoing CloudEvents published by command handlers.
"""

from .task_events import TaskCreatedIntegrationEventV1, TaskDeletedIntegrationEventV1, TaskUpdatedIntegrationEventV1
from .user_events import UserDeletedIntegrationEventV1, UserRegisteredIntegrationEventV1, UserRoleChangedIntegrationEventV1

__all__ = [
    "TaskCreatedIntegrationEventV1",
    "TaskUpdatedIntegrationEventV1",
    "TaskDeletedIntegrationEventV1",
    "UserRegisteredIntegrationEventV1",
    "UserRoleChangedIntegrationEventV1",
    "UserDeletedIntegrationEventV1",
]
