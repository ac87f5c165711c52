"""Issue token command with handler (login)."""

import logging
from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from observability import auth_failures, tokens_issued

from domain.repositories import UserDtoRepository
from infrastructure.password_hasher import PasswordHasher
from infrastructure.token_service import TokenAuthService
from integration.models import AccessTokenDto, UserSummaryDto

from .account_validation import normalize_email

log = logging.getLogger(__name__)

# Unknown email and wrong password get the same answer
INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class IssueTokenCommand(Command[OperationResult[AccessTokenDto]]):
    """Command to exchange email and password for a bearer token."""

    email: str
    password: str


class IssueTokenCommandHandler(CommandHandler[IssueTokenCommand, OperationResult[AccessTokenDto]]):
    def __init__(self, user_repository: UserDtoRepository, password_hasher: PasswordHasher, auth_service: TokenAuthService):
        self.user_repository = user_repository
        self.password_hasher = password_hasher
        self.auth_service = auth_service

    async def handle_async(self, request: IssueTokenCommand) -> OperationResult[AccessTokenDto]:
        email = normalize_email(request.email)
        user = await self.user_repository.get_by_email_async(email) if email else None
        if user is None or not self.password_hasher.verify(request.password or "", user.password_hash):
            auth_failures.add(1, {"reason": "bad_credentials"})
            log.info(f"Rejected login for '{email}'")
            return self.bad_request(INVALID_CREDENTIALS)

        token = self.auth_service.issue_token(user.id, user.role)
        tokens_issued.add(1, {"role": user.as_principal().role.value})
        return self.ok(
            AccessTokenDto(
                access_token=token,
                expires_in=self.auth_service.expires_in_seconds,
                user=UserSummaryDto.from_user(user),
            )
        )
