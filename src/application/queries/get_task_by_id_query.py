"""Get task by ID query with handler."""

from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from application.services import expand_task_async
from domain.models import Principal
from integration.models import TaskDetailsDto, TaskDto, UserDto

from .task_query_handler_base import TaskQueryHandlerBase


@dataclass
class GetTaskByIdQuery(Query[OperationResult[TaskDetailsDto]]):
    """Query to retrieve a single task by ID."""

    task_id: str
    principal: Principal


class GetTaskByIdQueryHandler(TaskQueryHandlerBase, QueryHandler[GetTaskByIdQuery, OperationResult[TaskDetailsDto]]):
    """Any authenticated caller may read any single task; there is no assignee check on read-one."""

    async def handle_async(self, request: GetTaskByIdQuery) -> OperationResult[TaskDetailsDto]:
        if not request.task_id:
            return self.bad_request("ID is required")

        caller = await self._resolve_caller_async(request.principal.id)
        if caller is None:
            return self.not_found(UserDto, request.principal.id)

        task = await self.task_repository.get_async(request.task_id)
        if task is None:
            return self.not_found(TaskDto, request.task_id)
        return self.ok(await expand_task_async(self.user_repository, task))
