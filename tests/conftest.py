"""Pytest configuration and shared fixtures for all tests.

This module provides:
- Test configuration and markers
- Shared fixtures for core components (auth service, password hasher, access policy)
- In-memory stores seeded with a small user directory
- Mocks for the mediation and eventing plumbing of command handlers
"""

import os
from typing import Any, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from _pytest.config import Config
from neuroglia.eventing.cloud_events.infrastructure import CloudEventBus
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator

from application.services import TaskAccessPolicy
from application.settings import Settings
from infrastructure.password_hasher import PasswordHasher
from infrastructure.token_service import TokenAuthService
from integration.models import UserDto
from integration.repositories import InMemoryTaskDtoRepository, InMemoryUserDtoRepository
from tests.fixtures.factories import UserDtoFactory

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config: Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (may use external services)")
    config.addinivalue_line("markers", "asyncio: Async tests")
    config.addinivalue_line("markers", "auth: Authentication/authorization tests")
    config.addinivalue_line("markers", "repository: Repository layer tests")
    config.addinivalue_line("markers", "command: Command handler tests")
    config.addinivalue_line("markers", "query: Query handler tests")
    config.addinivalue_line("markers", "client: API client tests")


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================


@pytest.fixture
def jwt_secret() -> str:
    """Provide JWT secret for testing."""
    return "test-secret-key-with-enough-entropy-for-hs256"  # pragma: allowlist secret


@pytest.fixture
def test_settings(jwt_secret: str) -> Settings:
    """Provide test-specific application settings."""
    return Settings(jwt_secret_key=jwt_secret, bcrypt_rounds=4, repository_type="memory")


# ============================================================================
# AUTH SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def auth_service(test_settings: Settings) -> TokenAuthService:
    """Provide a TokenAuthService instance for testing."""
    return TokenAuthService(test_settings)


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """Provide a PasswordHasher with the minimum cost factor to keep tests fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def access_policy() -> TaskAccessPolicy:
    """Provide the task access policy."""
    return TaskAccessPolicy()


# ============================================================================
# REPOSITORY FIXTURES
# ============================================================================


@pytest.fixture
def task_repository() -> InMemoryTaskDtoRepository:
    """Provide an empty in-memory task store."""
    return InMemoryTaskDtoRepository()


@pytest.fixture
def user_repository() -> InMemoryUserDtoRepository:
    """Provide an empty in-memory user directory."""
    return InMemoryUserDtoRepository()


@pytest.fixture
async def admin_user(user_repository: InMemoryUserDtoRepository) -> UserDto:
    """An administrator stored in the user directory."""
    return await user_repository.add_async(UserDtoFactory.create_admin(user_id="admin-1", email="ada@example.com"))


@pytest.fixture
async def employee_user(user_repository: InMemoryUserDtoRepository) -> UserDto:
    """An employee stored in the user directory."""
    return await user_repository.add_async(UserDtoFactory.create_employee(user_id="emp-1", email="eve@example.com"))


@pytest.fixture
async def other_employee_user(user_repository: InMemoryUserDtoRepository) -> UserDto:
    """A second employee, used to check that employees cannot reach each other's tasks."""
    return await user_repository.add_async(UserDtoFactory.create_employee(user_id="emp-2", name="Otto Other", email="otto@example.com"))


@pytest.fixture
def mock_repository() -> MagicMock:
    """Provide a mock task repository for handler tests that only check delegation."""
    mock: MagicMock = MagicMock()
    mock.get_async = AsyncMock(return_value=None)
    mock.add_async = AsyncMock()
    mock.find_async = AsyncMock(return_value=[])
    mock.get_scoped_async = AsyncMock(return_value=None)
    mock.apply_mutation_async = AsyncMock(return_value=None)
    mock.toggle_subtask_async = AsyncMock(return_value=None)
    mock.delete_scoped_async = AsyncMock(return_value=False)
    return mock


# ============================================================================
# HANDLER PLUMBING FIXTURES
# ============================================================================


@pytest.fixture
def cloud_event_bus() -> MagicMock:
    """Provide a mock CloudEventBus whose output stream records published events."""
    bus: MagicMock = MagicMock(spec=CloudEventBus)
    bus.output_stream = MagicMock()
    return bus


@pytest.fixture
def handler_plumbing(cloud_event_bus: MagicMock) -> dict[str, Any]:
    """Keyword arguments shared by every CommandHandlerBase subclass."""
    # CloudEventPublishingOptions is not a standalone type, it's part of the bus
    options: Any = MagicMock()
    options.source = "https://task-board.test"
    options.type_prefix = "io.taskboard"
    return {
        "mediator": MagicMock(spec=Mediator),
        "mapper": MagicMock(spec=Mapper),
        "cloud_event_bus": cloud_event_bus,
        "cloud_event_publishing_options": options,
    }


# ============================================================================
# CLEANUP FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables after each test."""
    original_env: dict[str, str] = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
