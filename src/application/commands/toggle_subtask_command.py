"""Toggle subtask command with handler."""

from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from observability import tasks_failed, tasks_updated

from application.services import expand_task_async
from domain.models import Principal
from integration.models import TaskDetailsDto, UserDto

from .task_command_handler_base import TASK_UNAVAILABLE, TaskCommandHandlerBase


@dataclass
class ToggleSubtaskCommand(Command[OperationResult[TaskDetailsDto]]):
    """Command to flip the completed flag of one subtask."""

    task_id: str
    subtask_id: str
    principal: Principal


class ToggleSubtaskCommandHandler(
    TaskCommandHandlerBase,
    CommandHandler[ToggleSubtaskCommand, OperationResult[TaskDetailsDto]],
):
    """Flip the flag store-side; the rest of the subtask sequence is left as stored."""

    async def handle_async(self, request: ToggleSubtaskCommand) -> OperationResult[TaskDetailsDto]:
        command = request
        add_span_attributes({"task.id": command.task_id, "task.subtask_id": command.subtask_id})

        caller = await self._resolve_caller_async(command.principal.id)
        if caller is None:
            return self.not_found(UserDto, command.principal.id)

        scope = self.access_policy.scope_for(caller.as_principal())
        updated = await self.task_repository.toggle_subtask_async(command.task_id, command.subtask_id, scope)
        if updated is None:
            tasks_failed.add(1, {"operation": "toggle_subtask", "reason": "scoped_miss"})
            return self.forbidden(TASK_UNAVAILABLE)

        tasks_updated.add(1, {"operation": "toggle_subtask"})
        await self._publish_task_updated_async(updated, caller, ["subtasks"])
        return self.ok(await expand_task_async(self.user_repository, updated))
