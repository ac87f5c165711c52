"""Abstract repository for the user directory."""

from abc import ABC, abstractmethod

from neuroglia.data.infrastructure.abstractions import Repository

from domain.enums import UserRole
from integration.models.user_dto import UserDto


class UserDtoRepository(Repository[UserDto, str], ABC):
    """Abstract repository for account documents."""

    @abstractmethod
    async def get_all_async(self) -> list[UserDto]:
        """Retrieve all accounts, ordered by name."""
        pass

    @abstractmethod
    async def get_by_email_async(self, email: str) -> UserDto | None:
        """Retrieve an account by its (normalized) email."""
        pass

    @abstractmethod
    async def get_many_async(self, user_ids: list[str]) -> list[UserDto]:
        """Retrieve the accounts matching the given ids; unknown ids are skipped."""
        pass

    @abstractmethod
    async def set_role_async(self, user_id: str, role: UserRole) -> UserDto | None:
        """Atomically change an account's role; returns None if the account is absent."""
        pass
