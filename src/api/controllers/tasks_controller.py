"""Tasks API controller with bearer authentication."""

from datetime import datetime

from classy_fastapi.decorators import delete, get, patch, post
from fastapi import Depends
from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.mvc import ControllerBase
from pydantic import BaseModel

from api.dependencies import get_current_principal
from application.commands import (
    AddSubtaskCommand,
    AddTaskCommentCommand,
    ChangeTaskStatusCommand,
    CreateTaskCommand,
    DeleteTaskCommand,
    ToggleSubtaskCommand,
    UpdateTaskCommand,
)
from application.queries import GetTaskByIdQuery, GetTasksQuery
from domain.models import Principal


class CreateTaskRequest(BaseModel):
    """Create task request model."""

    title: str
    description: str = ""
    priority: str = "medium"
    status: str | None = None
    due_date: datetime | None = None
    assigned_to: str | None = None
    subtasks: list[str] = []


class UpdateTaskRequest(BaseModel):
    """Partial task update; only the fields present in the body are changed."""

    title: str | None = None
    description: str | None = None
    priority: str | None = None
    status: str | None = None
    due_date: datetime | None = None
    assigned_to: str | None = None
    comment: str | None = None


class ChangeStatusRequest(BaseModel):
    status: str


class AddCommentRequest(BaseModel):
    text: str


class AddSubtaskRequest(BaseModel):
    title: str


class TasksController(ControllerBase):
    """Controller for task endpoints.

    Every endpoint requires a bearer token; which tasks the caller can reach
    is decided by the task access policy in the handlers.
    """

    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator):
        super().__init__(service_provider, mapper, mediator)

    @get("/")
    async def get_tasks(self, principal: Principal = Depends(get_current_principal)):
        """List tasks: all of them for admins, the assigned ones for employees."""
        result = await self.mediator.execute_async(GetTasksQuery(principal=principal))
        return self.process(result)

    @get("/{task_id}")
    async def get_task(self, task_id: str, principal: Principal = Depends(get_current_principal)):
        """Get a single task with assignee and creator expanded."""
        result = await self.mediator.execute_async(GetTaskByIdQuery(task_id=task_id, principal=principal))
        return self.process(result)

    @post("/")
    async def create_task(self, request: CreateTaskRequest, principal: Principal = Depends(get_current_principal)):
        """Create a new task. Tasks created by employees are assigned to them."""
        command = CreateTaskCommand(
            principal=principal,
            title=request.title,
            description=request.description,
            priority=request.priority,
            status=request.status,
            due_date=request.due_date,
            assigned_to=request.assigned_to,
            subtasks=request.subtasks,
        )
        result = await self.mediator.execute_async(command)
        return self.process(result)

    @patch("/{task_id}")
    async def update_task(self, task_id: str, request: UpdateTaskRequest, principal: Principal = Depends(get_current_principal)):
        """Apply a partial update and optionally append a comment, atomically."""
        fields = request.model_dump(exclude_unset=True)
        comment = fields.pop("comment", None)
        command = UpdateTaskCommand(task_id=task_id, principal=principal, fields=fields, comment=comment)
        result = await self.mediator.execute_async(command)
        return self.process(result)

    @delete("/{task_id}")
    async def delete_task(self, task_id: str, principal: Principal = Depends(get_current_principal)):
        """Delete a task. Employees can only delete tasks assigned to them."""
        result = await self.mediator.execute_async(DeleteTaskCommand(task_id=task_id, principal=principal))
        return self.process(result)

    @patch("/{task_id}/status")
    async def change_status(self, task_id: str, request: ChangeStatusRequest, principal: Principal = Depends(get_current_principal)):
        """Move a task to another board column."""
        result = await self.mediator.execute_async(ChangeTaskStatusCommand(task_id=task_id, principal=principal, status=request.status))
        return self.process(result)

    @post("/{task_id}/comments")
    async def add_comment(self, task_id: str, request: AddCommentRequest, principal: Principal = Depends(get_current_principal)):
        """Append a comment authored by the caller."""
        result = await self.mediator.execute_async(AddTaskCommentCommand(task_id=task_id, principal=principal, text=request.text))
        return self.process(result)

    @post("/{task_id}/subtasks")
    async def add_subtask(self, task_id: str, request: AddSubtaskRequest, principal: Principal = Depends(get_current_principal)):
        """Append a subtask."""
        result = await self.mediator.execute_async(AddSubtaskCommand(task_id=task_id, principal=principal, title=request.title))
        return self.process(result)

    @patch("/{task_id}/subtasks/{subtask_id}/toggle")
    async def toggle_subtask(self, task_id: str, subtask_id: str, principal: Principal = Depends(get_current_principal)):
        """Flip a subtask between done and not done."""
        result = await self.mediator.execute_async(ToggleSubtaskCommand(task_id=task_id, subtask_id=subtask_id, principal=principal))
        return self.process(result)
