"""Delete user command with handler.

Tasks that reference the deleted account keep the dangling id; read
responses render such references as null.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_bus import CloudEventBus
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_publisher import CloudEventPublishingOptions
from neuroglia.mapping import Mapper
from neuroglia.mediation import Command, CommandHandler, Mediator
from observability import users_deleted

from application.events.integration import UserDeletedIntegrationEventV1
from domain.models import Principal
from domain.repositories import UserDtoRepository
from integration.models import UserDto

from .command_handler_base import CommandHandlerBase

log = logging.getLogger(__name__)


@dataclass
class DeleteUserCommand(Command[OperationResult[dict[str, Any]]]):
    principal: Principal
    user_id: str


class DeleteUserCommandHandler(
    CommandHandlerBase,
    CommandHandler[DeleteUserCommand, OperationResult[dict[str, Any]]],
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

    async def handle_async(self, request: DeleteUserCommand) -> OperationResult[dict[str, Any]]:
        command = request

        caller = await self.user_repository.get_async(command.principal.id)
        if caller is None:
            return self.not_found(UserDto, command.principal.id)
        if not caller.as_principal().is_admin:
            return self.forbidden("Admin access required")
        if command.user_id == caller.id:
            return self.bad_request("You cannot delete your own account")

        if not await self.user_repository.contains_async(command.user_id):
            return self.not_found(UserDto, command.user_id)

        await self.user_repository.remove_async(command.user_id)
        users_deleted.add(1)
        log.info(f"🗑️ Account {command.user_id} deleted by {caller.id}")
        await self.publish_cloud_event_async(UserDeletedIntegrationEventV1(aggregate_id=command.user_id, created_at=datetime.now(UTC), deleted_by=caller.id))
        return self.ok({"id": command.user_id, "deleted": True})
