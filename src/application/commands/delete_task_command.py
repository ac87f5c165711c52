"""Delete task command with handler."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from observability import tasks_deleted, tasks_failed

from application.events.integration import TaskDeletedIntegrationEventV1
from domain.models import Principal
from integration.models import TaskDto, UserDto

from .task_command_handler_base import TaskCommandHandlerBase

log = logging.getLogger(__name__)


@dataclass
class DeleteTaskCommand(Command[OperationResult[dict[str, Any]]]):
    """Command to delete a task."""

    task_id: str
    principal: Principal


class DeleteTaskCommandHandler(
    TaskCommandHandlerBase,
    CommandHandler[DeleteTaskCommand, OperationResult[dict[str, Any]]],
):
    """Delete a task within the caller's scope.

    Admins may delete any task, employees only the tasks assigned to them. A
    scoped miss is reported as NotFound whether or not the task exists.
    """

    async def handle_async(self, request: DeleteTaskCommand) -> OperationResult[dict[str, Any]]:
        command = request
        add_span_attributes({"task.id": command.task_id, "task.caller_id": command.principal.id})

        caller = await self._resolve_caller_async(command.principal.id)
        if caller is None:
            return self.not_found(UserDto, command.principal.id)

        scope = self.access_policy.scope_for(caller.as_principal())
        deleted = await self.task_repository.delete_scoped_async(command.task_id, scope)
        if not deleted:
            tasks_failed.add(1, {"operation": "delete", "reason": "scoped_miss"})
            return self.not_found(TaskDto, command.task_id)

        tasks_deleted.add(1, {"caller_role": caller.as_principal().role.value})
        log.info(f"🗑️ Task {command.task_id} deleted by {caller.id}")
        await self.publish_cloud_event_async(
            TaskDeletedIntegrationEventV1(aggregate_id=command.task_id, created_at=datetime.now(UTC), deleted_by=caller.id)
        )
        return self.ok({"id": command.task_id, "deleted": True})
