import datetime
from dataclasses import dataclass, field

from domain.enums import TaskPriority, TaskStatus
from integration.models.task_dto import SubtaskDto, TaskCommentDto, TaskDto
from integration.models.user_dto import UserReferenceDto


@dataclass
class TaskDetailsDto:
    """Task with its assignee and creator expanded for display.

    A reference that points at a deleted account is rendered as None.
    """

    id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime.datetime | None = None
    created_by: UserReferenceDto | None = None
    assigned_to: UserReferenceDto | None = None
    comments: list[TaskCommentDto] = field(default_factory=list)
    subtasks: list[SubtaskDto] = field(default_factory=list)
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None

    @staticmethod
    def from_task(task: TaskDto, users: dict[str, UserReferenceDto]) -> "TaskDetailsDto":
        return TaskDetailsDto(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            created_by=users.get(task.created_by) if task.created_by else None,
            assigned_to=users.get(task.assigned_to) if task.assigned_to else None,
            comments=list(task.comments),
            subtasks=list(task.subtasks),
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
