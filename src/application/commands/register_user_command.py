"""Register user command with handler."""

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

from neuroglia.core import OperationResult
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_bus import CloudEventBus
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_publisher import CloudEventPublishingOptions
from neuroglia.mapping import Mapper
from neuroglia.mediation import Command, CommandHandler, Mediator
from neuroglia.observability.tracing import add_span_attributes
from observability import users_registered
from pymongo.errors import DuplicateKeyError

from application.events.integration import UserRegisteredIntegrationEventV1
from domain.enums import UserRole
from domain.repositories import UserDtoRepository
from infrastructure.password_hasher import PasswordHasher
from integration.models import UserDto, UserSummaryDto

from .account_validation import normalize_email, validate_new_account
from .command_handler_base import CommandHandlerBase

log = logging.getLogger(__name__)

DUPLICATE_EMAIL = "An account with this email already exists"


class AccountCreationHandlerBase(CommandHandlerBase):
    """Stores new accounts; shared by self-registration and admin provisioning."""

    def __init__(
        self,
        mediator: Mediator,
        mapper: Mapper,
        cloud_event_bus: CloudEventBus,
        cloud_event_publishing_options: CloudEventPublishingOptions,
        user_repository: UserDtoRepository,
        password_hasher: PasswordHasher,
    ):
        super().__init__(mediator, mapper, cloud_event_bus, cloud_event_publishing_options)
        self.user_repository = user_repository
        self.password_hasher = password_hasher

    async def _create_account_async(self, name: str, email: str, password: str, role: UserRole, provisioned_by: str | None) -> OperationResult[UserSummaryDto]:
        email = normalize_email(email)
        name = (name or "").strip()
        error = validate_new_account(name, email, password)
        if error is not None:
            return self.bad_request(error)

        if await self.user_repository.get_by_email_async(email) is not None:
            return self.conflict(DUPLICATE_EMAIL)

        now = datetime.now(UTC)
        user = UserDto(
            id=uuid.uuid4().hex,
            name=name,
            email=email,
            password_hash=self.password_hasher.hash(password),
            role=role,
            created_at=now,
            updated_at=now,
        )
        try:
            saved = await self.user_repository.add_async(user)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration for the same email
            return self.conflict(DUPLICATE_EMAIL)

        users_registered.add(1, {"role": role.value, "provisioned": provisioned_by is not None})
        log.info(f"👤 Account {saved.id} created (role={role.value}, provisioned_by={provisioned_by})")
        await self.publish_cloud_event_async(
            UserRegisteredIntegrationEventV1(
                aggregate_id=saved.id,
                created_at=now,
                email=saved.email,
                role=role.value,
                provisioned_by=provisioned_by,
            )
        )
        return self.created(UserSummaryDto.from_user(saved))


@dataclass
class RegisterUserCommand(Command[OperationResult[UserSummaryDto]]):
    """Command for public self-registration; the account is always an employee."""

    name: str
    email: str
    password: str


class RegisterUserCommandHandler(
    AccountCreationHandlerBase,
    CommandHandler[RegisterUserCommand, OperationResult[UserSummaryDto]],
):
    async def handle_async(self, request: RegisterUserCommand) -> OperationResult[UserSummaryDto]:
        add_span_attributes({"user.registration": "self"})
        return await self._create_account_async(request.name, request.email, request.password, UserRole.EMPLOYEE, provisioned_by=None)
