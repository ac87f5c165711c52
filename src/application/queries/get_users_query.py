"""Get users query with handler (admin only)."""

from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from domain.models import Principal
from domain.repositories import UserDtoRepository
from integration.models import UserDto, UserSummaryDto


@dataclass
class GetUsersQuery(Query[OperationResult[list[UserSummaryDto]]]):
    """Query to list every account; password hashes are never included."""

    principal: Principal


class GetUsersQueryHandler(QueryHandler[GetUsersQuery, OperationResult[list[UserSummaryDto]]]):
    def __init__(self, user_repository: UserDtoRepository):
        super().__init__()
        self.user_repository = user_repository

    async def handle_async(self, request: GetUsersQuery) -> OperationResult[list[UserSummaryDto]]:
        caller = await self.user_repository.get_async(request.principal.id)
        if caller is None:
            return self.not_found(UserDto, request.principal.id)
        if not caller.as_principal().is_admin:
            return self.forbidden("Admin access required")

        users = await self.user_repository.get_all_async()
        return self.ok([UserSummaryDto.from_user(user) for user in users])
