"""Application layer account command handler tests."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import DuplicateKeyError

from application.commands import (
    CreateUserCommand,
    CreateUserCommandHandler,
    DeleteUserCommand,
    DeleteUserCommandHandler,
    IssueTokenCommand,
    IssueTokenCommandHandler,
    RegisterUserCommand,
    RegisterUserCommandHandler,
    UpdateUserRoleCommand,
    UpdateUserRoleCommandHandler,
)
from domain.enums import UserRole
from infrastructure.password_hasher import PasswordHasher
from infrastructure.token_service import TokenAuthService
from integration.models import UserDto
from integration.repositories import InMemoryUserDtoRepository
from tests.fixtures.factories import UserDtoFactory
from tests.fixtures.mixins import BaseTestCase


@pytest.mark.command
class TestRegisterUserCommand(BaseTestCase):
    """Test public self-registration."""

    @pytest.fixture
    def handler(self, handler_plumbing: dict[str, Any], user_repository: InMemoryUserDtoRepository, password_hasher: PasswordHasher) -> RegisterUserCommandHandler:
        return RegisterUserCommandHandler(**handler_plumbing, user_repository=user_repository, password_hasher=password_hasher)

    @pytest.mark.asyncio
    async def test_register_creates_employee(
        self, handler: RegisterUserCommandHandler, user_repository: InMemoryUserDtoRepository, password_hasher: PasswordHasher, cloud_event_bus: MagicMock
    ) -> None:
        # Act
        result = await handler.handle_async(RegisterUserCommand(name=" Grace ", email=" Grace@Example.com ", password="secret123"))

        # Assert
        self.assert_status(result, 201)
        assert result.data.role == UserRole.EMPLOYEE
        assert result.data.email == "grace@example.com"
        assert result.data.name == "Grace"
        assert not hasattr(result.data, "password_hash")
        stored = await user_repository.get_by_email_async("grace@example.com")
        assert stored.password_hash != "secret123"
        assert password_hasher.verify("secret123", stored.password_hash)
        assert self.published_events(cloud_event_bus)[0].type.endswith("user.registered.v1")

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, handler: RegisterUserCommandHandler, employee_user: UserDto) -> None:
        result = await handler.handle_async(RegisterUserCommand(name="Eve again", email=employee_user.email.upper(), password="secret123"))

        self.assert_status(result, 409)

    @pytest.mark.asyncio
    async def test_store_side_duplicate_conflicts(self, handler: RegisterUserCommandHandler, user_repository: InMemoryUserDtoRepository) -> None:
        """A registration racing another one for the same email still answers Conflict."""
        user_repository.add_async = AsyncMock(side_effect=DuplicateKeyError("E11000 duplicate key error", code=11000))

        result = await handler.handle_async(RegisterUserCommand(name="Grace", email="grace@example.com", password="secret123"))

        self.assert_status(result, 409)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name,email,password",
        [
            ("", "grace@example.com", "secret123"),
            ("Grace", "not-an-email", "secret123"),
            ("Grace", "grace@example.com", "123"),
        ],
    )
    async def test_invalid_account_fields_are_rejected(self, handler: RegisterUserCommandHandler, name: str, email: str, password: str) -> None:
        result = await handler.handle_async(RegisterUserCommand(name=name, email=email, password=password))

        self.assert_status(result, 400)


@pytest.mark.command
class TestCreateUserCommand(BaseTestCase):
    """Test administrator provisioning."""

    @pytest.fixture
    def handler(self, handler_plumbing: dict[str, Any], user_repository: InMemoryUserDtoRepository, password_hasher: PasswordHasher) -> CreateUserCommandHandler:
        return CreateUserCommandHandler(**handler_plumbing, user_repository=user_repository, password_hasher=password_hasher)

    @pytest.mark.asyncio
    async def test_admin_creates_admin(self, handler: CreateUserCommandHandler, admin_user: UserDto) -> None:
        command = CreateUserCommand(principal=admin_user.as_principal(), name="Linus", email="linus@example.com", password="secret123", role="admin")

        result = await handler.handle_async(command)

        self.assert_status(result, 201)
        assert result.data.role == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_employee_cannot_provision(self, handler: CreateUserCommandHandler, employee_user: UserDto) -> None:
        command = CreateUserCommand(principal=employee_user.as_principal(), name="Linus", email="linus@example.com", password="secret123")

        result = await handler.handle_async(command)

        self.assert_status(result, 403)

    @pytest.mark.asyncio
    async def test_invalid_role_is_rejected(self, handler: CreateUserCommandHandler, admin_user: UserDto) -> None:
        command = CreateUserCommand(principal=admin_user.as_principal(), name="Linus", email="linus@example.com", password="secret123", role="owner")

        result = await handler.handle_async(command)

        self.assert_status(result, 400)


@pytest.mark.command
@pytest.mark.auth
class TestIssueTokenCommand(BaseTestCase):
    """Test login."""

    @pytest.fixture
    async def registered_user(self, user_repository: InMemoryUserDtoRepository, password_hasher: PasswordHasher) -> UserDto:
        return await user_repository.add_async(UserDtoFactory.create_employee(email="eve@example.com", password_hash=password_hasher.hash("secret123")))

    @pytest.fixture
    def handler(self, user_repository: InMemoryUserDtoRepository, password_hasher: PasswordHasher, auth_service: TokenAuthService) -> IssueTokenCommandHandler:
        return IssueTokenCommandHandler(user_repository=user_repository, password_hasher=password_hasher, auth_service=auth_service)

    @pytest.mark.asyncio
    async def test_valid_credentials_issue_token(self, handler: IssueTokenCommandHandler, registered_user: UserDto, auth_service: TokenAuthService) -> None:
        # Act
        result = await handler.handle_async(IssueTokenCommand(email="EVE@example.com", password="secret123"))

        # Assert
        self.assert_status(result, 200)
        assert result.data.token_type == "bearer"
        assert result.data.expires_in == 7 * 24 * 3600
        assert result.data.user.id == registered_user.id
        principal = auth_service.verify_token(result.data.access_token)
        assert principal.id == registered_user.id
        assert principal.role == UserRole.EMPLOYEE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password", [("eve@example.com", "wrong"), ("nobody@example.com", "secret123"), ("", "")])
    async def test_bad_credentials_get_the_same_answer(self, handler: IssueTokenCommandHandler, registered_user: UserDto, email: str, password: str) -> None:
        result = await handler.handle_async(IssueTokenCommand(email=email, password=password))

        self.assert_status(result, 400)
        assert result.detail == "Invalid email or password"


@pytest.mark.command
class TestUserAdministrationCommands(BaseTestCase):
    """Test role changes and account deletion."""

    @pytest.fixture
    def role_handler(self, handler_plumbing: dict[str, Any], user_repository: InMemoryUserDtoRepository) -> UpdateUserRoleCommandHandler:
        return UpdateUserRoleCommandHandler(**handler_plumbing, user_repository=user_repository)

    @pytest.fixture
    def delete_handler(self, handler_plumbing: dict[str, Any], user_repository: InMemoryUserDtoRepository) -> DeleteUserCommandHandler:
        return DeleteUserCommandHandler(**handler_plumbing, user_repository=user_repository)

    @pytest.mark.asyncio
    async def test_admin_promotes_employee(
        self, role_handler: UpdateUserRoleCommandHandler, admin_user: UserDto, employee_user: UserDto, user_repository: InMemoryUserDtoRepository
    ) -> None:
        result = await role_handler.handle_async(UpdateUserRoleCommand(principal=admin_user.as_principal(), user_id=employee_user.id, role="admin"))

        self.assert_status(result, 200)
        assert result.data.role == UserRole.ADMIN
        assert (await user_repository.get_async(employee_user.id)).role == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_role_change_rejects_unknown_role(self, role_handler: UpdateUserRoleCommandHandler, admin_user: UserDto, employee_user: UserDto) -> None:
        result = await role_handler.handle_async(UpdateUserRoleCommand(principal=admin_user.as_principal(), user_id=employee_user.id, role="manager"))

        self.assert_status(result, 400)

    @pytest.mark.asyncio
    async def test_role_change_for_missing_account(self, role_handler: UpdateUserRoleCommandHandler, admin_user: UserDto) -> None:
        result = await role_handler.handle_async(UpdateUserRoleCommand(principal=admin_user.as_principal(), user_id="ghost", role="admin"))

        self.assert_status(result, 404)

    @pytest.mark.asyncio
    async def test_demoted_admin_loses_admin_commands(
        self, role_handler: UpdateUserRoleCommandHandler, admin_user: UserDto, employee_user: UserDto, user_repository: InMemoryUserDtoRepository
    ) -> None:
        """The role stored on the account is authoritative, even with an older token."""
        await user_repository.set_role_async(admin_user.id, UserRole.EMPLOYEE)

        result = await role_handler.handle_async(UpdateUserRoleCommand(principal=admin_user.as_principal(), user_id=employee_user.id, role="admin"))

        self.assert_status(result, 403)

    @pytest.mark.asyncio
    async def test_admin_deletes_account(
        self, delete_handler: DeleteUserCommandHandler, admin_user: UserDto, employee_user: UserDto, user_repository: InMemoryUserDtoRepository
    ) -> None:
        result = await delete_handler.handle_async(DeleteUserCommand(principal=admin_user.as_principal(), user_id=employee_user.id))

        self.assert_status(result, 200)
        assert not await user_repository.contains_async(employee_user.id)

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_self(self, delete_handler: DeleteUserCommandHandler, admin_user: UserDto) -> None:
        result = await delete_handler.handle_async(DeleteUserCommand(principal=admin_user.as_principal(), user_id=admin_user.id))

        self.assert_status(result, 400)

    @pytest.mark.asyncio
    async def test_employee_cannot_delete_accounts(self, delete_handler: DeleteUserCommandHandler, employee_user: UserDto, other_employee_user: UserDto) -> None:
        result = await delete_handler.handle_async(DeleteUserCommand(principal=employee_user.as_principal(), user_id=other_employee_user.id))

        self.assert_status(result, 403)

    @pytest.mark.asyncio
    async def test_delete_missing_account(self, delete_handler: DeleteUserCommandHandler, admin_user: UserDto) -> None:
        result = await delete_handler.handle_async(DeleteUserCommand(principal=admin_user.as_principal(), user_id="ghost"))

        self.assert_status(result, 404)
