"""Tests for the database initializer hosted service."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from application.settings import Settings
from infrastructure.database_initializer import USERS_COLLECTION, DatabaseInitializer
from infrastructure.password_hasher import PasswordHasher


@pytest.fixture
def collections() -> dict[str, MagicMock]:
    def make() -> MagicMock:
        collection = MagicMock()
        collection.create_index = AsyncMock()
        collection.find_one = AsyncMock(return_value=None)
        collection.insert_one = AsyncMock()
        return collection

    return {"users": make(), "tasks": make()}


@pytest.fixture
def database(collections: dict[str, MagicMock]) -> MagicMock:
    database = MagicMock()
    database.__getitem__.side_effect = lambda name: collections[name]
    return database


class TestDatabaseInitializer:
    """Test index creation and the bootstrap administrator."""

    @pytest.mark.asyncio
    async def test_email_index_is_unique(self, database: MagicMock, collections: dict[str, MagicMock], test_settings: Settings, password_hasher: PasswordHasher) -> None:
        await DatabaseInitializer(database, test_settings, password_hasher).ensure_indexes_async()

        email_index = [c for c in collections[USERS_COLLECTION].create_index.call_args_list if c.args[0] == [("email", 1)]]
        assert len(email_index) == 1
        assert email_index[0].kwargs["unique"] is True

    @pytest.mark.asyncio
    async def test_bootstrap_admin_is_created_once(self, database: MagicMock, collections: dict[str, MagicMock], password_hasher: PasswordHasher) -> None:
        # Arrange
        settings = Settings(bootstrap_admin_email="Root@Example.com", bootstrap_admin_password="secret123", bcrypt_rounds=4)
        initializer = DatabaseInitializer(database, settings, password_hasher)

        # Act
        created = await initializer.ensure_bootstrap_admin_async()

        # Assert
        assert created is True
        document = collections[USERS_COLLECTION].insert_one.call_args[0][0]
        assert document["email"] == "root@example.com"
        assert document["role"] == "admin"
        assert password_hasher.verify("secret123", document["password_hash"])

        collections[USERS_COLLECTION].find_one.return_value = document
        assert await initializer.ensure_bootstrap_admin_async() is False

    @pytest.mark.asyncio
    async def test_no_bootstrap_admin_without_configuration(self, database: MagicMock, collections: dict[str, MagicMock], test_settings: Settings, password_hasher: PasswordHasher) -> None:
        assert await DatabaseInitializer(database, test_settings, password_hasher).ensure_bootstrap_admin_async() is False
        collections[USERS_COLLECTION].insert_one.assert_not_called()
