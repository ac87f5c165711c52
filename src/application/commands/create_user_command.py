"""Create user command with handler (admin provisioning)."""

from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes

from domain.enums import UserRole
from domain.models import Principal
from integration.models import UserDto, UserSummaryDto

from .command_handler_base import allowed_values, parse_enum
from .register_user_command import AccountCreationHandlerBase


@dataclass
class CreateUserCommand(Command[OperationResult[UserSummaryDto]]):
    """Command for an administrator to provision an account with a chosen role."""

    principal: Principal
    name: str
    email: str
    password: str
    role: str = UserRole.EMPLOYEE.value


class CreateUserCommandHandler(
    AccountCreationHandlerBase,
    CommandHandler[CreateUserCommand, OperationResult[UserSummaryDto]],
):
    async def handle_async(self, request: CreateUserCommand) -> OperationResult[UserSummaryDto]:
        command = request
        add_span_attributes({"user.registration": "provisioned", "user.role": str(command.role)})

        caller = await self.user_repository.get_async(command.principal.id)
        if caller is None:
            return self.not_found(UserDto, command.principal.id)
        if not caller.as_principal().is_admin:
            return self.forbidden("Admin access required")

        role = parse_enum(UserRole, command.role)
        if role is None:
            return self.bad_request(f"Invalid role '{command.role}'. Allowed: {allowed_values(UserRole)}")

        return await self._create_account_async(command.name, command.email, command.password, role, provisioned_by=caller.id)
