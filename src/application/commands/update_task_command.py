"""Update task command with handler.

The generic partial update of the task mutation engine: simple field sets
plus an optional comment, applied as one atomic store operation.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from observability import task_comments_added, task_processing_time, tasks_failed
from opentelemetry import trace

from domain.enums import TaskPriority, TaskStatus
from domain.models import Principal, TaskMutation
from integration.models import TaskCommentDto, TaskDetailsDto, UserDto

from .command_handler_base import allowed_values, parse_enum
from .task_command_handler_base import TaskCommandHandlerBase

log = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

# Fields a partial update may set; sequences and ownership have dedicated operations
UPDATABLE_FIELDS = frozenset({"title", "description", "priority", "status", "due_date", "assigned_to"})


@dataclass
class UpdateTaskCommand(Command[OperationResult[TaskDetailsDto]]):
    """Command to update an existing task.

    `fields` holds only the fields the client actually sent, so an explicit
    `assigned_to: None` unassigns while an absent key leaves it untouched.
    """

    task_id: str
    principal: Principal
    fields: dict[str, Any] = field(default_factory=dict)
    comment: str | None = None


class UpdateTaskCommandHandler(
    TaskCommandHandlerBase,
    CommandHandler[UpdateTaskCommand, OperationResult[TaskDetailsDto]],
):
    """Handle task updates under the caller's authorization scope."""

    async def handle_async(self, request: UpdateTaskCommand) -> OperationResult[TaskDetailsDto]:
        command = request
        start_time = time.time()

        add_span_attributes(
            {
                "task.id": command.task_id,
                "task.updated_fields": ",".join(sorted(command.fields)),
                "task.has_comment": bool(command.comment and command.comment.strip()),
            }
        )

        caller = await self._resolve_caller_async(command.principal.id)
        if caller is None:
            return self.not_found(UserDto, command.principal.id)

        if not await self._is_in_scope_async(caller, command.task_id):
            return self._scoped_miss("update")

        unknown = sorted(set(command.fields) - UPDATABLE_FIELDS)
        if unknown:
            return self.bad_request(f"Fields cannot be updated: {', '.join(unknown)}")

        with tracer.start_as_current_span("build_task_mutation"):
            set_fields: dict[str, Any] = {}
            for name, value in command.fields.items():
                error = await self._validate_field_async(caller, name, value, set_fields)
                if error is not None:
                    tasks_failed.add(1, {"operation": "update", "reason": "validation"})
                    return error

            mutation = TaskMutation(set_fields=set_fields)
            comment = (command.comment or "").strip()
            if comment:
                mutation = mutation.with_append(
                    "comments",
                    TaskCommentDto(id=uuid.uuid4().hex, text=comment, author=caller.name, created_at=datetime.now(UTC)),
                )

        if mutation.is_empty:
            return self.bad_request("No changes supplied")

        result = await self._apply_mutation_async(caller, command.task_id, mutation, "update")
        if result.is_success and comment:
            task_comments_added.add(1)

        task_processing_time.record((time.time() - start_time) * 1000, {"operation": "update"})
        return result

    async def _validate_field_async(self, caller: UserDto, name: str, value: Any, set_fields: dict[str, Any]) -> OperationResult | None:
        """Validate one requested field and store its normalized value in `set_fields`.

        Returns an error result, or None when the field is acceptable.
        """
        match name:
            case "title":
                title = (value or "").strip()
                if not title:
                    return self.bad_request("Title is required")
                set_fields["title"] = title

            case "description":
                set_fields["description"] = (value or "").strip()

            case "status":
                status = parse_enum(TaskStatus, value)
                if status is None:
                    return self.bad_request(f"Invalid status '{value}'. Allowed: {allowed_values(TaskStatus)}")
                set_fields["status"] = status

            case "priority":
                priority = parse_enum(TaskPriority, value)
                if priority is None:
                    return self.bad_request(f"Invalid priority '{value}'. Allowed: {allowed_values(TaskPriority)}")
                set_fields["priority"] = priority

            case "due_date":
                if isinstance(value, str):
                    try:
                        value = datetime.fromisoformat(value)
                    except ValueError:
                        return self.bad_request(f"Invalid due date '{value}'")
                set_fields["due_date"] = value

            case "assigned_to":
                if not self.access_policy.can_reassign(caller.as_principal(), value):
                    return self.forbidden("Employees can only assign tasks to themselves")
                if value is not None and value != caller.id and not await self.user_repository.contains_async(value):
                    return self.bad_request(f"Assignee '{value}' does not exist")
                set_fields["assigned_to"] = value

        return None
