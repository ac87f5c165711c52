"""API services package."""

from .auth import CredentialError, InvalidTokenError, MalformedTokenError, MissingTokenError, TokenAuthService, configure_auth_middleware

__all__ = [
    "CredentialError",
    "InvalidTokenError",
    "MalformedTokenError",
    "MissingTokenError",
    "TokenAuthService",
    "configure_auth_middleware",
]
