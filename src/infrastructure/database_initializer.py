"""Database initializer hosted service.

Prepares MongoDB on startup:
- unique index on `users.email` (the store-side guarantee of email uniqueness)
- lookup indexes on `tasks.id`, `tasks.assigned_to` and `tasks.created_at`
- an optional bootstrap administrator, so a fresh deployment can be managed

Implements HostedService for proper lifecycle management:
- start_async(): Called on application startup
- stop_async(): Called on application shutdown (closes the client)
"""

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from neuroglia.hosting.abstractions import HostedService
from pymongo import ASCENDING, DESCENDING

from application.settings import Settings, app_settings
from domain.enums import UserRole
from infrastructure.password_hasher import PasswordHasher
from integration.models.user_dto import UserDto
from integration.repositories.document_values import to_document_value

if TYPE_CHECKING:
    from neuroglia.hosting.web import WebApplicationBuilder

logger = logging.getLogger(__name__)

# Must match the collection names given to MotorRepository.configure in main.py
TASKS_COLLECTION = "tasks"
USERS_COLLECTION = "users"


class DatabaseInitializer(HostedService):
    """Hosted service that creates indexes and seeds the bootstrap administrator.

    Talks to MongoDB directly because the DI-registered repositories are
    scoped and not available while HostedServices start.
    """

    def __init__(self, database: AsyncIOMotorDatabase, settings: Settings, password_hasher: PasswordHasher) -> None:
        self._database = database
        self._settings = settings
        self._password_hasher = password_hasher

    async def ensure_indexes_async(self) -> None:
        users = self._database[USERS_COLLECTION]
        tasks = self._database[TASKS_COLLECTION]
        await users.create_index([("id", ASCENDING)], unique=True, name="users_id")
        await users.create_index([("email", ASCENDING)], unique=True, name="users_email_unique")
        await tasks.create_index([("id", ASCENDING)], unique=True, name="tasks_id")
        await tasks.create_index([("assigned_to", ASCENDING), ("created_at", DESCENDING)], name="tasks_assignee_created")
        logger.info("✅ MongoDB indexes ensured")

    async def ensure_bootstrap_admin_async(self) -> bool:
        """Create the configured bootstrap administrator if no account uses its email.

        Returns:
            True if an account was created
        """
        email = self._settings.bootstrap_admin_email.strip().lower()
        password = self._settings.bootstrap_admin_password
        if not email or not password:
            logger.debug("No bootstrap administrator configured")
            return False

        users = self._database[USERS_COLLECTION]
        if await users.find_one({"email": email}) is not None:
            logger.debug(f"Bootstrap administrator already exists: {email}")
            return False

        now = datetime.now(UTC)
        admin = UserDto(
            id=uuid.uuid4().hex,
            name=self._settings.bootstrap_admin_name,
            email=email,
            password_hash=self._password_hasher.hash(password),
            role=UserRole.ADMIN,
            created_at=now,
            updated_at=now,
        )
        await users.insert_one(to_document_value(admin))
        logger.info(f"👤 Created bootstrap administrator: {email}")
        return True

    async def start_async(self) -> None:
        """Called automatically by the Neuroglia host during application startup."""
        await self.ensure_indexes_async()
        await self.ensure_bootstrap_admin_async()
        logger.info("✅ DatabaseInitializer started")

    async def stop_async(self) -> None:
        """Called automatically by the Neuroglia host during application shutdown."""
        self._database.client.close()
        logger.info("✅ DatabaseInitializer stopped")

    @staticmethod
    def configure(builder: "WebApplicationBuilder") -> "WebApplicationBuilder":
        """Register the initializer as a HostedService.

        Args:
            builder: The WebApplicationBuilder to configure

        Returns:
            The builder instance for fluent chaining
        """
        logger.info("🔧 Configuring DatabaseInitializer...")

        mongo_url = app_settings.connection_strings.get("mongo", "mongodb://localhost:27017")
        client: AsyncIOMotorClient = AsyncIOMotorClient(mongo_url)
        initializer = DatabaseInitializer(
            database=client[app_settings.database_name],
            settings=app_settings,
            password_hasher=PasswordHasher(rounds=app_settings.bcrypt_rounds),
        )
        builder.services.add_singleton(HostedService, singleton=initializer)

        logger.info("✅ DatabaseInitializer configured")
        return builder
