"""Get all tasks query with handler (admin only)."""

from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from application.services import expand_tasks_async
from domain.models import Principal, TaskScope
from integration.models import TaskDetailsDto, UserDto

from .task_query_handler_base import TaskQueryHandlerBase


@dataclass
class GetAllTasksQuery(Query[OperationResult[list[TaskDetailsDto]]]):
    """Query to retrieve every task without filtering."""

    principal: Principal


class GetAllTasksQueryHandler(TaskQueryHandlerBase, QueryHandler[GetAllTasksQuery, OperationResult[list[TaskDetailsDto]]]):
    async def handle_async(self, request: GetAllTasksQuery) -> OperationResult[list[TaskDetailsDto]]:
        caller = await self._resolve_caller_async(request.principal.id)
        if caller is None:
            return self.not_found(UserDto, request.principal.id)
        if not caller.as_principal().is_admin:
            return self.forbidden("Admin access required")

        tasks = await self.task_repository.find_async(TaskScope.unrestricted())
        return self.ok(await expand_tasks_async(self.user_repository, tasks))
