"""Shared plumbing for handlers that change existing tasks."""

import logging
from datetime import UTC, datetime

from neuroglia.core import OperationResult
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_bus import CloudEventBus
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_publisher import CloudEventPublishingOptions
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from observability import tasks_failed, tasks_updated

from application.events.integration import TaskUpdatedIntegrationEventV1
from application.services import TaskAccessPolicy, expand_task_async
from domain.models import TaskMutation
from domain.repositories import TaskDtoRepository, UserDtoRepository
from integration.models import TaskDetailsDto, TaskDto, UserDto

from .command_handler_base import CommandHandlerBase

log = logging.getLogger(__name__)

# A scoped miss cannot tell "absent" from "not yours"; both get this answer
TASK_UNAVAILABLE = "Unauthorized or task not found"


class TaskCommandHandlerBase(CommandHandlerBase):
    """Base class for the task mutation engine handlers.

    Resolves the caller against the user directory (the stored role is the
    authoritative one), scopes every store operation through the
    TaskAccessPolicy, and reports a scoped miss as Forbidden.
    """

    def __init__(
        self,
        mediator: Mediator,
        mapper: Mapper,
        cloud_event_bus: CloudEventBus,
        cloud_event_publishing_options: CloudEventPublishingOptions,
        task_repository: TaskDtoRepository,
        user_repository: UserDtoRepository,
        access_policy: TaskAccessPolicy,
    ):
        super().__init__(mediator, mapper, cloud_event_bus, cloud_event_publishing_options)
        self.task_repository = task_repository
        self.user_repository = user_repository
        self.access_policy = access_policy

    async def _resolve_caller_async(self, user_id: str) -> UserDto | None:
        caller = await self.user_repository.get_async(user_id)
        if caller is None:
            log.warning(f"Token refers to an unknown account: {user_id}")
        return caller

    async def _is_in_scope_async(self, caller: UserDto, task_id: str) -> bool:
        """Check the task is visible to the caller before validating the request.

        The scoped write still guards the change itself; this only makes a
        foreign task answer Forbidden whatever the payload holds.
        """
        scope = self.access_policy.scope_for(caller.as_principal())
        return await self.task_repository.get_scoped_async(task_id, scope) is not None

    def _scoped_miss(self, operation: str) -> OperationResult:
        tasks_failed.add(1, {"operation": operation, "reason": "scoped_miss"})
        return self.forbidden(TASK_UNAVAILABLE)

    async def _apply_mutation_async(self, caller: UserDto, task_id: str, mutation: TaskMutation, operation: str) -> OperationResult[TaskDetailsDto]:
        """Apply the mutation against the caller's scope and expand the result."""
        scope = self.access_policy.scope_for(caller.as_principal())
        mutation = mutation.with_set(updated_at=datetime.now(UTC))

        updated = await self.task_repository.apply_mutation_async(task_id, scope, mutation)
        if updated is None:
            return self._scoped_miss(operation)

        tasks_updated.add(1, {"operation": operation})
        changed_fields = sorted(name for name in mutation.set_fields if name != "updated_at") + sorted(mutation.appends)
        await self._publish_task_updated_async(updated, caller, changed_fields, comment_added="comments" in mutation.appends)
        return self.ok(await expand_task_async(self.user_repository, updated))

    async def _publish_task_updated_async(self, task: TaskDto, caller: UserDto, changed_fields: list[str], comment_added: bool = False) -> None:
        await self.publish_cloud_event_async(
            TaskUpdatedIntegrationEventV1(
                aggregate_id=task.id,
                created_at=datetime.now(UTC),
                updated_by=caller.id,
                changed_fields=changed_fields,
                comment_added=comment_added,
            )
        )
