import datetime
import logging
import uuid
from dataclasses import asdict
from enum import Enum
from typing import TypeVar

from neuroglia.eventing.cloud_events.cloud_event import CloudEvent, CloudEventSpecVersion
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_bus import CloudEventBus
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_publisher import CloudEventPublishingOptions
from neuroglia.integration.models import IntegrationEvent
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator

log = logging.getLogger(__name__)

TEnum = TypeVar("TEnum", bound=Enum)


def parse_enum(enum_type: type[TEnum], value: str | Enum | None) -> TEnum | None:
    """Return the enum member for `value`, or None when it is not one of the allowed values."""
    if value is None:
        return None
    try:
        return enum_type(value.value if isinstance(value, Enum) else value)
    except ValueError:
        return None


def allowed_values(enum_type: type[Enum]) -> str:
    return ", ".join(member.value for member in enum_type)


class CommandHandlerBase:
    """Represents the base class for all services used to handle task board commands."""

    mediator: Mediator
    """ Gets the service used to mediate calls """

    mapper: Mapper
    """ Gets the service used to map objects """

    cloud_event_bus: CloudEventBus
    """ Gets the service used to observe the cloud events consumed and produced by the application """

    cloud_event_publishing_options: CloudEventPublishingOptions
    """ Gets the options used to configure how the application should publish cloud events """

    def __init__(
        self,
        mediator: Mediator,
        mapper: Mapper,
        cloud_event_bus: CloudEventBus,
        cloud_event_publishing_options: CloudEventPublishingOptions,
    ):
        self.mediator = mediator
        self.mapper = mapper
        self.cloud_event_bus = cloud_event_bus
        self.cloud_event_publishing_options = cloud_event_publishing_options

    async def publish_cloud_event_async(self, ev: IntegrationEvent) -> None:
        """Wraps the integration event in a cloud event and pushes it to the bus.

        Publishing failures are logged and never fail the command that
        produced the event: the state change has already been stored.
        """
        try:
            cloud_event = CloudEvent(
                id=uuid.uuid4().hex,
                source=self.cloud_event_publishing_options.source,
                type=f"{self.cloud_event_publishing_options.type_prefix}.{ev.__cloudevent__type__}",
                specversion=CloudEventSpecVersion.v1_0,
                sequencetype=None,
                sequence=None,
                time=datetime.datetime.now(),
                subject=ev.aggregate_id,
                data=asdict(ev),
            )
            self.cloud_event_bus.output_stream.on_next(cloud_event)
        except Exception as e:
            log.error(f"Failed to publish a cloudevent {ev}: Exception {e}")
