"""Get task statistics query with handler (analytics dashboard)."""

from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from domain.enums import TaskPriority, TaskStatus
from domain.models import Principal
from integration.models import AssigneeWorkloadDto, TaskDto, TaskStatisticsDto, UserDto

from .task_query_handler_base import TaskQueryHandlerBase


@dataclass
class GetTaskStatisticsQuery(Query[OperationResult[TaskStatisticsDto]]):
    """Query for aggregate task figures over the caller's scope."""

    principal: Principal
    now: datetime | None = None


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def compute_task_statistics(tasks: list[TaskDto], now: datetime) -> TaskStatisticsDto:
    """Summarize tasks: totals, overdue count, completion rate and per-status/priority counts.

    A task is overdue when its due date has passed and it is not done.
    """
    now = _as_aware(now)
    statuses = Counter(TaskStatus(task.status) for task in tasks)
    priorities = Counter(TaskPriority(task.priority) for task in tasks)
    completed = statuses[TaskStatus.DONE]
    overdue = sum(1 for task in tasks if task.due_date is not None and TaskStatus(task.status) != TaskStatus.DONE and _as_aware(task.due_date) < now)

    return TaskStatisticsDto(
        total=len(tasks),
        completed=completed,
        pending=len(tasks) - completed,
        overdue=overdue,
        completion_rate=round(completed * 100 / len(tasks), 1) if tasks else 0.0,
        by_status={status.value: statuses[status] for status in TaskStatus},
        by_priority={priority.value: priorities[priority] for priority in TaskPriority},
    )


class GetTaskStatisticsQueryHandler(TaskQueryHandlerBase, QueryHandler[GetTaskStatisticsQuery, OperationResult[TaskStatisticsDto]]):
    """Employees get figures for their own tasks; admins for all tasks plus the per-assignee workload."""

    async def handle_async(self, request: GetTaskStatisticsQuery) -> OperationResult[TaskStatisticsDto]:
        caller = await self._resolve_caller_async(request.principal.id)
        if caller is None:
            return self.not_found(UserDto, request.principal.id)
        principal = caller.as_principal()

        tasks = await self.task_repository.find_async(self.access_policy.scope_for(principal))
        statistics = compute_task_statistics(tasks, request.now or datetime.now(UTC))

        if principal.is_admin:
            statistics.workload = await self._workload_async(tasks)
        return self.ok(statistics)

    async def _workload_async(self, tasks: list[TaskDto]) -> list[AssigneeWorkloadDto]:
        workload: dict[str, AssigneeWorkloadDto] = {}
        for task in tasks:
            if not task.assigned_to:
                continue
            entry = workload.setdefault(task.assigned_to, AssigneeWorkloadDto(user_id=task.assigned_to, name=""))
            entry.total += 1
            if TaskStatus(task.status) == TaskStatus.DONE:
                entry.completed += 1

        names = {user.id: user.name for user in await self.user_repository.get_many_async(list(workload))}
        for user_id, entry in workload.items():
            entry.name = names.get(user_id, "Unknown")
        return sorted(workload.values(), key=lambda entry: (-entry.total, entry.name))
