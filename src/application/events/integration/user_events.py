from dataclasses import dataclass
from datetime import datetime

from neuroglia.eventing.cloud_events.decorators import cloudevent
from neuroglia.integration.models import IntegrationEvent


@cloudevent("user.registered.v1")
@dataclass
class UserRegisteredIntegrationEventV1(IntegrationEvent[str]):
    """Outgoing CloudEvent"""

    aggregate_id: str
    created_at: datetime
    email: str = ""
    role: str = "employee"
    provisioned_by: str | None = None


@cloudevent("user.role-changed.v1")
@dataclass
class UserRoleChangedIntegrationEventV1(IntegrationEvent[str]):
    """Outgoing CloudEvent"""

    aggregate_id: str
    created_at: datetime
    role: str = "employee"
    changed_by: str = ""


@cloudevent("user.deleted.v1")
@dataclass
class UserDeletedIntegrationEventV1(IntegrationEvent[str]):
    """Outgoing CloudEvent"""

    aggregate_id: str
    created_at: datetime
    deleted_by: str = ""
