"""In-memory user directory implementation (for testing/development)."""

import copy
import logging
from datetime import UTC, datetime

from neuroglia.hosting.abstractions import ApplicationBuilderBase
from pymongo.errors import DuplicateKeyError

from domain.enums import UserRole
from domain.repositories.user_dto_repository import UserDtoRepository
from integration.models.user_dto import UserDto

logger = logging.getLogger(__name__)


class InMemoryUserDtoRepository(UserDtoRepository):
    """
    In-memory implementation of UserDtoRepository.

    Enforces email uniqueness the way the unique index does in MongoDB,
    raising the same DuplicateKeyError.
    """

    def __init__(self) -> None:
        self._users: dict[str, UserDto] = {}

    async def get_async(self, id: str) -> UserDto | None:
        user = self._users.get(id)
        return copy.deepcopy(user) if user else None

    async def get_all_async(self) -> list[UserDto]:
        return sorted((copy.deepcopy(u) for u in self._users.values()), key=lambda u: u.name)

    async def add_async(self, entity: UserDto) -> UserDto:
        if any(u.email == entity.email and u.id != entity.id for u in self._users.values()):
            raise DuplicateKeyError(f"E11000 duplicate key error: email {entity.email!r}", code=11000)
        now = datetime.now(UTC)
        entity.created_at = entity.created_at or now
        entity.updated_at = entity.updated_at or now
        self._users[entity.id] = copy.deepcopy(entity)
        return entity

    async def update_async(self, entity: UserDto) -> UserDto:
        entity.updated_at = datetime.now(UTC)
        self._users[entity.id] = copy.deepcopy(entity)
        return entity

    async def remove_async(self, id: str) -> None:
        self._users.pop(id, None)

    async def contains_async(self, id: str) -> bool:
        return id in self._users

    async def _do_add_async(self, entity: UserDto) -> UserDto:
        """Internal add implementation required by Repository base class."""
        return await self.add_async(entity)

    async def _do_update_async(self, entity: UserDto) -> UserDto:
        """Internal update implementation required by Repository base class."""
        return await self.update_async(entity)

    async def _do_remove_async(self, id: str) -> None:
        """Internal remove implementation required by Repository base class."""
        await self.remove_async(id)

    async def get_by_email_async(self, email: str) -> UserDto | None:
        for user in self._users.values():
            if user.email == email:
                return copy.deepcopy(user)
        return None

    async def get_many_async(self, user_ids: list[str]) -> list[UserDto]:
        return [copy.deepcopy(self._users[uid]) for uid in dict.fromkeys(user_ids) if uid in self._users]

    async def set_role_async(self, user_id: str, role: UserRole) -> UserDto | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        user.role = role
        user.updated_at = datetime.now(UTC)
        return copy.deepcopy(user)

    def clear_all(self) -> None:
        """Clear all accounts (for testing)."""
        self._users.clear()

    @staticmethod
    def configure(builder: ApplicationBuilderBase) -> None:
        """
        Configure InMemoryUserDtoRepository in the service collection.

        Args:
            builder: The application builder
        """
        repository = InMemoryUserDtoRepository()

        builder.services.add_singleton(InMemoryUserDtoRepository, singleton=repository)
        builder.services.add_singleton(UserDtoRepository, singleton=repository)

        logger.info("Configured InMemoryUserDtoRepository")
