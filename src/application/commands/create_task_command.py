"""Create task command with handler."""

import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

from neuroglia.core import OperationResult
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_bus import CloudEventBus
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_publisher import CloudEventPublishingOptions
from neuroglia.mapping import Mapper
from neuroglia.mediation import Command, CommandHandler, Mediator
from neuroglia.observability.tracing import add_span_attributes
from observability import task_processing_time, tasks_created, tasks_failed
from opentelemetry import trace

from application.events.integration import TaskCreatedIntegrationEventV1
from application.services import TaskAccessPolicy, expand_task_async
from domain.enums import TaskPriority, TaskStatus
from domain.models import Principal
from domain.repositories import TaskDtoRepository, UserDtoRepository
from integration.models import SubtaskDto, TaskDetailsDto, TaskDto, UserDto

from .command_handler_base import CommandHandlerBase, allowed_values, parse_enum

log = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass
class CreateTaskCommand(Command[OperationResult[TaskDetailsDto]]):
    """Command to create a new task."""

    principal: Principal
    title: str
    description: str = ""
    priority: str = TaskPriority.MEDIUM.value
    status: str | None = None
    due_date: datetime | None = None
    assigned_to: str | None = None
    subtasks: list[str] = field(default_factory=list)


class CreateTaskCommandHandler(
    CommandHandlerBase,
    CommandHandler[CreateTaskCommand, OperationResult[TaskDetailsDto]],
):
    """Handle task creation.

    Employees always become the assignee of the tasks they create; an admin's
    requested assignee is honored as long as the account exists.
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
        super().__init__(
            mediator,
            mapper,
            cloud_event_bus,
            cloud_event_publishing_options,
        )
        self.task_repository = task_repository
        self.user_repository = user_repository
        self.access_policy = access_policy

    async def handle_async(self, request: CreateTaskCommand) -> OperationResult[TaskDetailsDto]:
        """Handle create task command with custom instrumentation."""
        command = request
        start_time = time.time()

        add_span_attributes(
            {
                "task.priority": str(command.priority),
                "task.caller_id": command.principal.id,
                "task.has_requested_assignee": command.assigned_to is not None,
            }
        )

        caller = await self.user_repository.get_async(command.principal.id)
        if caller is None:
            return self.not_found(UserDto, command.principal.id)
        principal = caller.as_principal()

        title = (command.title or "").strip()
        if not title:
            tasks_failed.add(1, {"operation": "create", "reason": "validation"})
            return self.bad_request("Title is required")

        status = parse_enum(TaskStatus, command.status) if command.status is not None else TaskStatus.TODO
        if status is None:
            return self.bad_request(f"Invalid status '{command.status}'. Allowed: {allowed_values(TaskStatus)}")

        priority = parse_enum(TaskPriority, command.priority) if command.priority is not None else TaskPriority.MEDIUM
        if priority is None:
            return self.bad_request(f"Invalid priority '{command.priority}'. Allowed: {allowed_values(TaskPriority)}")

        with tracer.start_as_current_span("resolve_task_assignee") as span:
            assigned_to = self.access_policy.resolve_assignee_for_create(principal, command.assigned_to)
            if assigned_to is not None and assigned_to != principal.id and not await self.user_repository.contains_async(assigned_to):
                tasks_failed.add(1, {"operation": "create", "reason": "unknown_assignee"})
                return self.bad_request(f"Assignee '{assigned_to}' does not exist")
            span.set_attribute("task.assigned_to", assigned_to or "unassigned")
            span.set_attribute("task.caller_role", principal.role.value)

        now = datetime.now(UTC)
        task = TaskDto(
            id=uuid.uuid4().hex,
            title=title,
            description=(command.description or "").strip(),
            status=status,
            priority=priority,
            due_date=command.due_date,
            created_by=principal.id,
            assigned_to=assigned_to,
            subtasks=[SubtaskDto(id=uuid.uuid4().hex, title=s.strip()) for s in command.subtasks if s and s.strip()],
            created_at=now,
            updated_at=now,
        )
        saved_task = await self.task_repository.add_async(task)

        processing_time_ms = (time.time() - start_time) * 1000
        tasks_created.add(
            1,
            {
                "priority": priority.value,
                "status": status.value,
                "has_assignee": bool(assigned_to),
                "caller_role": principal.role.value,
            },
        )
        task_processing_time.record(processing_time_ms, {"operation": "create", "priority": priority.value})
        log.info(f"📝 Task {saved_task.id} created by {principal.id} (assigned_to={assigned_to})")

        await self.publish_cloud_event_async(
            TaskCreatedIntegrationEventV1(
                aggregate_id=saved_task.id,
                created_at=now,
                title=saved_task.title,
                status=status.value,
                priority=priority.value,
                created_by=principal.id,
                assigned_to=assigned_to,
            )
        )

        return self.created(await expand_task_async(self.user_repository, saved_task))
