"""Authentication API controller (token issuance and self-registration)."""

from classy_fastapi.decorators import post
from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.mvc import ControllerBase
from pydantic import BaseModel

from application.commands import IssueTokenCommand, RegisterUserCommand


class LoginRequest(BaseModel):
    """Login request model."""

    email: str
    password: str


class RegisterRequest(BaseModel):
    """Self-registration request model."""

    name: str
    email: str
    password: str


class AuthController(ControllerBase):
    """Public endpoints: no bearer token is required here."""

    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator):
        super().__init__(service_provider, mapper, mediator)

    @post("/login")
    async def login(self, request: LoginRequest):
        """Exchange email and password for a bearer token valid for 7 days."""
        result = await self.mediator.execute_async(IssueTokenCommand(email=request.email, password=request.password))
        return self.process(result)

    @post("/register")
    async def register(self, request: RegisterRequest):
        """Create an employee account."""
        command = RegisterUserCommand(name=request.name, email=request.email, password=request.password)
        result = await self.mediator.execute_async(command)
        return self.process(result)
