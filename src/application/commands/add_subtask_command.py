"""Add subtask command with handler."""

import uuid
from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes

from domain.models import Principal, TaskMutation
from integration.models import SubtaskDto, TaskDetailsDto, UserDto

from .task_command_handler_base import TaskCommandHandlerBase


@dataclass
class AddSubtaskCommand(Command[OperationResult[TaskDetailsDto]]):
    """Command to append a new, not yet completed subtask."""

    task_id: str
    principal: Principal
    title: str


class AddSubtaskCommandHandler(
    TaskCommandHandlerBase,
    CommandHandler[AddSubtaskCommand, OperationResult[TaskDetailsDto]],
):
    async def handle_async(self, request: AddSubtaskCommand) -> OperationResult[TaskDetailsDto]:
        command = request
        add_span_attributes({"task.id": command.task_id})

        caller = await self._resolve_caller_async(command.principal.id)
        if caller is None:
            return self.not_found(UserDto, command.principal.id)

        if not await self._is_in_scope_async(caller, command.task_id):
            return self._scoped_miss("add_subtask")

        title = (command.title or "").strip()
        if not title:
            return self.bad_request("Subtask title is required")

        subtask = SubtaskDto(id=uuid.uuid4().hex, title=title, completed=False)
        return await self._apply_mutation_async(caller, command.task_id, TaskMutation().with_append("subtasks", subtask), "add_subtask")
