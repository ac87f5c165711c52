"""Analytics controller: aggregate task figures for dashboards."""

from classy_fastapi.decorators import get
from fastapi import Depends
from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.mvc import ControllerBase

from api.dependencies import get_current_principal
from application.queries import GetTaskStatisticsQuery
from domain.models import Principal


class AnalyticsController(ControllerBase):
    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator):
        super().__init__(service_provider, mapper, mediator)

    @get("/summary")
    async def get_summary(self, principal: Principal = Depends(get_current_principal)):
        """Totals, overdue count and completion rate over the caller's tasks; admins also get per-assignee workload."""
        result = await self.mediator.execute_async(GetTaskStatisticsQuery(principal=principal))
        return self.process(result)
