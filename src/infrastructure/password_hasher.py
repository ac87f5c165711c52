"""Password hashing with bcrypt."""

import logging
from typing import TYPE_CHECKING

import bcrypt

from application.settings import app_settings

if TYPE_CHECKING:
    from neuroglia.hosting.web import WebApplicationBuilder

log = logging.getLogger(__name__)

# bcrypt only considers the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """Hashes and verifies account passwords."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash; a corrupt hash never matches."""
        try:
            return bcrypt.checkpw(password.encode("utf-8")[:BCRYPT_MAX_BYTES], password_hash.encode("utf-8"))
        except ValueError:
            log.warning("Stored password hash is not a valid bcrypt hash")
            return False

    @staticmethod
    def configure(builder: "WebApplicationBuilder") -> None:
        builder.services.add_singleton(PasswordHasher, singleton=PasswordHasher(rounds=app_settings.bcrypt_rounds))
        log.info(f"🔐 PasswordHasher configured (bcrypt rounds={app_settings.bcrypt_rounds})")
