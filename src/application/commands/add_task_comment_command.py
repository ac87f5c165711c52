"""Add task comment command with handler."""

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from observability import task_comments_added

from domain.models import Principal, TaskMutation
from integration.models import TaskCommentDto, TaskDetailsDto, UserDto

from .task_command_handler_base import TaskCommandHandlerBase


@dataclass
class AddTaskCommentCommand(Command[OperationResult[TaskDetailsDto]]):
    """Command to append one comment, authored by the caller, to a task."""

    task_id: str
    principal: Principal
    text: str


class AddTaskCommentCommandHandler(
    TaskCommandHandlerBase,
    CommandHandler[AddTaskCommentCommand, OperationResult[TaskDetailsDto]],
):
    """Append the comment with a store-side push so concurrent comments are all kept."""

    async def handle_async(self, request: AddTaskCommentCommand) -> OperationResult[TaskDetailsDto]:
        command = request
        add_span_attributes({"task.id": command.task_id})

        caller = await self._resolve_caller_async(command.principal.id)
        if caller is None:
            return self.not_found(UserDto, command.principal.id)

        if not await self._is_in_scope_async(caller, command.task_id):
            return self._scoped_miss("add_comment")

        text = (command.text or "").strip()
        if not text:
            return self.bad_request("Comment text is required")

        comment = TaskCommentDto(id=uuid.uuid4().hex, text=text, author=caller.name, created_at=datetime.now(UTC))
        result = await self._apply_mutation_async(caller, command.task_id, TaskMutation().with_append("comments", comment), "add_comment")
        if result.is_success:
            task_comments_added.add(1)
        return result
