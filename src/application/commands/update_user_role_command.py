"""Update user role command with handler.

The only path that writes an account's role.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from neuroglia.core import OperationResult
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_bus import CloudEventBus
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_publisher import CloudEventPublishingOptions
from neuroglia.mapping import Mapper
from neuroglia.mediation import Command, CommandHandler, Mediator
from neuroglia.observability.tracing import add_span_attributes
from observability import user_role_changes

from application.events.integration import UserRoleChangedIntegrationEventV1
from domain.enums import UserRole
from domain.models import Principal
from domain.repositories import UserDtoRepository
from integration.models import UserDto, UserSummaryDto

from .command_handler_base import CommandHandlerBase, allowed_values, parse_enum

log = logging.getLogger(__name__)


@dataclass
class UpdateUserRoleCommand(Command[OperationResult[UserSummaryDto]]):
    principal: Principal
    user_id: str
    role: str


class UpdateUserRoleCommandHandler(
    CommandHandlerBase,
    CommandHandler[UpdateUserRoleCommand, OperationResult[UserSummaryDto]],
):
    def __init__(
        self,
        mediator: Mediator,
        mapper: Mapper,
        cloud_event_bus: CloudEventBus,
        cloud_event_publishing_options: CloudEventPublishingOptions,
        user_repository: UserDtoRepository,
    ):
        super().__init__(mediator, mapper, cloud_event_bus, cloud_event_publishing_options)
        self.user_repository = user_repository

    async def handle_async(self, request: UpdateUserRoleCommand) -> OperationResult[UserSummaryDto]:
        command = request
        add_span_attributes({"user.id": command.user_id, "user.role": str(command.role)})

        caller = await self.user_repository.get_async(command.principal.id)
        if caller is None:
            return self.not_found(UserDto, command.principal.id)
        if not caller.as_principal().is_admin:
            return self.forbidden("Admin access required")

        if not command.user_id:
            return self.bad_request("User ID is required")
        role = parse_enum(UserRole, command.role)
        if role is None:
            return self.bad_request(f"Invalid role '{command.role}'. Allowed: {allowed_values(UserRole)}")

        updated = await self.user_repository.set_role_async(command.user_id, role)
        if updated is None:
            return self.not_found(UserDto, command.user_id)

        user_role_changes.add(1, {"role": role.value})
        log.info(f"🔑 Role of account {updated.id} set to {role.value} by {caller.id}")
        await self.publish_cloud_event_async(
            UserRoleChangedIntegrationEventV1(aggregate_id=updated.id, created_at=datetime.now(UTC), role=role.value, changed_by=caller.id)
        )
        return self.ok(UserSummaryDto.from_user(updated))
