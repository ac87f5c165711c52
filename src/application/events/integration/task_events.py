from dataclasses import dataclass, field
from datetime import datetime

from neuroglia.eventing.cloud_events.decorators import cloudevent
from neuroglia.integration.models import IntegrationEvent


@cloudevent("task.created.v1")
@dataclass
class TaskCreatedIntegrationEventV1(IntegrationEvent[str]):
    """Outgoing CloudEvent"""

    aggregate_id: str
    created_at: datetime
    title: str = ""
    status: str = "todo"
    priority: str = "medium"
    created_by: str | None = None
    assigned_to: str | None = None


@cloudevent("task.updated.v1")
@dataclass
class TaskUpdatedIntegrationEventV1(IntegrationEvent[str]):
    """Outgoing CloudEvent"""

    aggregate_id: str
    created_at: datetime
    updated_by: str = ""
    changed_fields: list[str] = field(default_factory=list)
    comment_added: bool = False


@cloudevent("task.deleted.v1")
@dataclass
class TaskDeletedIntegrationEventV1(IntegrationEvent[str]):
    """Outgoing CloudEvent"""

    aggregate_id: str
    created_at: datetime
    deleted_by: str = ""
