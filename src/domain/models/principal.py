"""Principal value object."""

from dataclasses import dataclass

from domain.enums import UserRole


@dataclass(frozen=True)
class Principal:
    """The verified identity behind a request.

    Built from the signed claims of a bearer token, or from the stored
    account once the caller has been resolved against the user directory.
    """

    id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
