import datetime
from dataclasses import dataclass, field

from neuroglia.data.abstractions import Identifiable, queryable

from domain.enums import TaskPriority, TaskStatus


@dataclass
class TaskCommentDto:
    id: str
    text: str
    author: str
    created_at: datetime.datetime | None = None


@dataclass
class SubtaskDto:
    id: str
    title: str
    completed: bool = False


@queryable
@dataclass
class TaskDto(Identifiable[str]):
    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime.datetime | None = None
    created_by: str | None = None
    assigned_to: str | None = None
    comments: list[TaskCommentDto] = field(default_factory=list)
    subtasks: list[SubtaskDto] = field(default_factory=list)
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None
