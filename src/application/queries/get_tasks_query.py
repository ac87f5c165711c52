"""Get tasks query with handler and role-based filtering."""

from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from application.services import expand_tasks_async
from domain.models import Principal
from integration.models import TaskDetailsDto, UserDto

from .task_query_handler_base import TaskQueryHandlerBase


@dataclass
class GetTasksQuery(Query[OperationResult[list[TaskDetailsDto]]]):
    """Query to retrieve the caller's tasks with role-based filtering."""

    principal: Principal


class GetTasksQueryHandler(TaskQueryHandlerBase, QueryHandler[GetTasksQuery, OperationResult[list[TaskDetailsDto]]]):
    """Handle task retrieval with role-based filtering.

    Admins see every task; employees see exactly the tasks assigned to them.
    Assignee and creator are expanded to {id, name, email}.
    """

    async def handle_async(self, request: GetTasksQuery) -> OperationResult[list[TaskDetailsDto]]:
        caller = await self._resolve_caller_async(request.principal.id)
        if caller is None:
            return self.not_found(UserDto, request.principal.id)

        tasks = await self.task_repository.find_async(self.access_policy.scope_for(caller.as_principal()))
        return self.ok(await expand_tasks_async(self.user_repository, tasks))
