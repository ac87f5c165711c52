"""Authorization policy for task data.

The policy is the only access-control boundary for tasks: every task command
and query derives its store filter from `scope_for`, so an employee can never
read, change or delete a task that is not assigned to them.
"""

import logging
from typing import TYPE_CHECKING

from domain.models import Principal, TaskScope

if TYPE_CHECKING:
    from neuroglia.hosting.web import WebApplicationBuilder

logger = logging.getLogger(__name__)


class TaskAccessPolicy:
    """Decides which tasks a principal may act on.

    Access Rules:
    1. admin: unrestricted, every task matches
    2. employee: only tasks where `assigned_to == principal.id`
    3. Creation: employees are always assigned their own task; an admin's
       requested assignee (possibly none) is honored verbatim
    """

    def scope_for(self, principal: Principal) -> TaskScope:
        if principal.is_admin:
            return TaskScope.unrestricted()
        return TaskScope.assigned_to(principal.id)

    def resolve_assignee_for_create(self, principal: Principal, requested_assignee: str | None) -> str | None:
        if principal.is_admin:
            return requested_assignee
        if requested_assignee and requested_assignee != principal.id:
            logger.debug(f"Ignoring assignee {requested_assignee} requested by employee {principal.id}")
        return principal.id

    def can_reassign(self, principal: Principal, assignee: str | None) -> bool:
        """Whether the principal may set a task's assignee to `assignee` on update."""
        return principal.is_admin or assignee == principal.id

    @staticmethod
    def configure(builder: "WebApplicationBuilder") -> None:
        builder.services.add_singleton(TaskAccessPolicy, singleton=TaskAccessPolicy())
