"""Change task status command with handler (kanban column moves)."""

from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes

from domain.enums import TaskStatus
from domain.models import Principal, TaskMutation
from integration.models import TaskDetailsDto, UserDto

from .command_handler_base import allowed_values, parse_enum
from .task_command_handler_base import TaskCommandHandlerBase


@dataclass
class ChangeTaskStatusCommand(Command[OperationResult[TaskDetailsDto]]):
    """Command to move a task to another status; nothing else changes."""

    task_id: str
    principal: Principal
    status: str


class ChangeTaskStatusCommandHandler(
    TaskCommandHandlerBase,
    CommandHandler[ChangeTaskStatusCommand, OperationResult[TaskDetailsDto]],
):
    async def handle_async(self, request: ChangeTaskStatusCommand) -> OperationResult[TaskDetailsDto]:
        command = request
        add_span_attributes({"task.id": command.task_id, "task.status": str(command.status)})

        caller = await self._resolve_caller_async(command.principal.id)
        if caller is None:
            return self.not_found(UserDto, command.principal.id)

        if not await self._is_in_scope_async(caller, command.task_id):
            return self._scoped_miss("change_status")

        status = parse_enum(TaskStatus, command.status)
        if status is None:
            return self.bad_request(f"Invalid status '{command.status}'. Allowed: {allowed_values(TaskStatus)}")

        return await self._apply_mutation_async(caller, command.task_id, TaskMutation(set_fields={"status": status}), "change_status")
