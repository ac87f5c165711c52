"""Shared caller resolution for task queries."""

import logging

from domain.repositories import TaskDtoRepository, UserDtoRepository
from integration.models import UserDto

from application.services import TaskAccessPolicy

log = logging.getLogger(__name__)


class TaskQueryHandlerBase:
    """Base for query handlers that read tasks on behalf of a caller.

    Queries use the role stored on the caller's account rather than the one
    in the token, so a role change applies to already issued tokens.
    """

    def __init__(self, task_repository: TaskDtoRepository, user_repository: UserDtoRepository, access_policy: TaskAccessPolicy):
        self.task_repository = task_repository
        self.user_repository = user_repository
        self.access_policy = access_policy

    async def _resolve_caller_async(self, user_id: str) -> UserDto | None:
        caller = await self.user_repository.get_async(user_id)
        if caller is None:
            log.warning(f"Token refers to an unknown account: {user_id}")
        return caller
