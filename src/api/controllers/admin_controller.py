"""Admin controller for account and task administration.

All endpoints require the admin role, checked against the token here and
against the stored account in the handlers.
"""

import logging

from classy_fastapi.decorators import delete, get, patch, post
from fastapi import Depends
from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.mvc import ControllerBase
from pydantic import BaseModel

from api.dependencies import require_roles
from application.commands import CreateUserCommand, DeleteUserCommand, UpdateUserRoleCommand
from application.queries import GetAllTasksQuery, GetUsersQuery
from domain.models import Principal

logger = logging.getLogger(__name__)


# ============================================================================
# REQUEST MODELS
# ============================================================================


class CreateUserRequest(BaseModel):
    """Account provisioning request."""

    name: str
    email: str
    password: str
    role: str = "employee"


class UpdateRoleRequest(BaseModel):
    """Role change request."""

    user_id: str
    role: str


# ============================================================================
# CONTROLLER
# ============================================================================


class AdminController(ControllerBase):
    """Controller for administrative endpoints."""

    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator):
        super().__init__(service_provider, mapper, mediator)

    @get("/users")
    async def get_users(self, principal: Principal = Depends(require_roles("admin"))):
        """List every account without credentials."""
        result = await self.mediator.execute_async(GetUsersQuery(principal=principal))
        return self.process(result)

    @post("/users")
    async def create_user(self, request: CreateUserRequest, principal: Principal = Depends(require_roles("admin"))):
        """Provision an account with the given role."""
        command = CreateUserCommand(principal=principal, name=request.name, email=request.email, password=request.password, role=request.role)
        result = await self.mediator.execute_async(command)
        return self.process(result)

    @delete("/users/{user_id}")
    async def delete_user(self, user_id: str, principal: Principal = Depends(require_roles("admin"))):
        """Delete an account. Tasks that reference it are left untouched."""
        result = await self.mediator.execute_async(DeleteUserCommand(principal=principal, user_id=user_id))
        return self.process(result)

    @patch("/update-role")
    async def update_role(self, request: UpdateRoleRequest, principal: Principal = Depends(require_roles("admin"))):
        """Set an account's role to admin or employee."""
        result = await self.mediator.execute_async(UpdateUserRoleCommand(principal=principal, user_id=request.user_id, role=request.role))
        return self.process(result)

    @get("/tasks")
    async def get_all_tasks(self, principal: Principal = Depends(require_roles("admin"))):
        """List every task, unfiltered."""
        result = await self.mediator.execute_async(GetAllTasksQuery(principal=principal))
        return self.process(result)
