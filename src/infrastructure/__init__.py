"""Infrastructure layer for cross-cutting concerns."""

from .database_initializer import DatabaseInitializer
from .password_hasher import PasswordHasher
from .token_service import TokenAuthService

__all__ = [
    "DatabaseInitializer",
    "PasswordHasher",
    "TokenAuthService",
]
