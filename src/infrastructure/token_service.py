"""Bearer-token authentication service.

Issues and verifies the HS256 tokens handed out at login. A token embeds the
account id and role and expires `jwt_expiration_days` after issuance; there
is no refresh, an expired token is rejected like any other invalid token.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import jwt

from application.settings import Settings, app_settings
from domain.enums import UserRole
from domain.models import Principal

if TYPE_CHECKING:
    from neuroglia.hosting.web import WebApplicationBuilder


class CredentialError(Exception):
    """Base class for every credential verification failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingTokenError(CredentialError):
    """No Authorization header (or an empty one) was supplied."""


class MalformedTokenError(CredentialError):
    """The Authorization header carries no bearer token segment."""


class InvalidTokenError(CredentialError):
    """Signature, expiry or claim validation failed."""


class TokenAuthService:
    """Service for issuing and verifying bearer tokens."""

    _log = logging.getLogger("TokenAuthService")

    def __init__(self, settings: Settings):
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.token_lifetime = timedelta(days=settings.jwt_expiration_days)

    @property
    def expires_in_seconds(self) -> int:
        return int(self.token_lifetime.total_seconds())

    def issue_token(self, user_id: str, role: UserRole, issued_at: datetime | None = None) -> str:
        """Sign a token for the given account.

        Args:
            user_id: Account id, stored in both `id` and `sub`
            role: Account role at issuance time
            issued_at: Issuance instant (defaults to now, UTC)

        Returns:
            Encoded JWT string
        """
        issued_at = issued_at or datetime.now(UTC)
        payload = {
            "id": user_id,
            "sub": user_id,
            "role": UserRole(role).value,
            "iat": issued_at,
            "exp": issued_at + self.token_lifetime,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Principal:
        """Verify a token and return the principal it was issued for.

        Raises:
            InvalidTokenError: On bad signature, expiry, or missing/unknown claims
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm], options={"require": ["exp", "id"]})
        except jwt.ExpiredSignatureError as e:
            self._log.info("Bearer token expired")
            raise InvalidTokenError("The access token expired") from e
        except jwt.InvalidTokenError as e:
            self._log.debug(f"Bearer token invalid: {e}")
            raise InvalidTokenError("The access token is invalid") from e

        try:
            role = UserRole(payload.get("role"))
        except ValueError as e:
            raise InvalidTokenError("The access token carries an unknown role") from e
        return Principal(id=str(payload["id"]), role=role)

    def authenticate_header(self, authorization: str | None) -> Principal:
        """Extract and verify the bearer token of an Authorization header value.

        Raises:
            MissingTokenError: Header absent or blank
            MalformedTokenError: Scheme is not Bearer, or no token follows it
            InvalidTokenError: Token verification failed
        """
        if authorization is None or not authorization.strip():
            raise MissingTokenError("No token provided")

        parts = authorization.split()
        if parts[0].lower() != "bearer" or len(parts) != 2:
            raise MalformedTokenError("Invalid token format")
        return self.verify_token(parts[1])

    @staticmethod
    def configure(builder: "WebApplicationBuilder") -> None:
        """Register a TokenAuthService singleton built from the application settings.

        Args:
            builder: WebApplicationBuilder instance for service registration
        """
        log = logging.getLogger(__name__)

        if app_settings.jwt_secret_key == Settings.model_fields["jwt_secret_key"].default and app_settings.environment == "production":
            log.warning("⚠️ JWT_SECRET_KEY is left at its default value in production")

        builder.services.add_singleton(TokenAuthService, singleton=TokenAuthService(app_settings))
        log.info(f"🔐 TokenAuthService configured (alg={app_settings.jwt_algorithm}, lifetime={app_settings.jwt_expiration_days}d)")
