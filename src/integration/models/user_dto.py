import datetime
from dataclasses import dataclass

from neuroglia.data.abstractions import Identifiable, queryable

from domain.enums import UserRole
from domain.models import Principal


@queryable
@dataclass
class UserDto(Identifiable[str]):
    id: str
    name: str
    email: str
    password_hash: str
    role: UserRole = UserRole.EMPLOYEE
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None

    def as_principal(self) -> Principal:
        """Principal carrying the role currently stored on the account."""
        return Principal(id=self.id, role=UserRole(self.role))


@dataclass
class UserSummaryDto:
    """Account as exposed over the API (credential excluded)."""

    id: str
    name: str
    email: str
    role: UserRole
    created_at: datetime.datetime | None = None

    @staticmethod
    def from_user(user: UserDto) -> "UserSummaryDto":
        return UserSummaryDto(id=user.id, name=user.name, email=user.email, role=user.role, created_at=user.created_at)


@dataclass
class UserReferenceDto:
    """Expanded account reference embedded in task responses."""

    id: str
    name: str
    email: str

    @staticmethod
    def from_user(user: UserDto) -> "UserReferenceDto":
        return UserReferenceDto(id=user.id, name=user.name, email=user.email)
