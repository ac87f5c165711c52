"""FastAPI dependencies for authentication.

Note: These dependencies bridge FastAPI's dependency injection with Neuroglia's DI container.
Since FastAPI dependencies can't directly access the service provider, we retrieve the
TokenAuthService from the request state, which is injected by middleware.

Every credential failure becomes a 401 carrying an RFC6750-compliant
`WWW-Authenticate` header so that clients know to log in again.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from observability import auth_failures

from api.services import CredentialError, MalformedTokenError, MissingTokenError, TokenAuthService
from domain.models import Principal

log = logging.getLogger(__name__)

# Declares the bearer scheme for OpenAPI; the raw header is parsed by TokenAuthService
bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")


def get_auth_service(request: Request) -> TokenAuthService:
    """Get TokenAuthService from request state (injected by middleware).

    Raises:
        RuntimeError: If TokenAuthService not found in request state
    """
    auth_service = getattr(request.state, "auth_service", None)
    if auth_service is None:
        raise RuntimeError("TokenAuthService not found in request state. " "Ensure DI middleware is properly configured.")
    return auth_service


def _www_authenticate(error: CredentialError) -> str:
    if isinstance(error, MissingTokenError):
        return 'Bearer realm="task-board"'
    if isinstance(error, MalformedTokenError):
        return f'Bearer error="invalid_request", error_description="{error.message}"'
    return f'Bearer error="invalid_token", error_description="{error.message}"'


async def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> Principal:
    """Authenticate the request from its `Authorization: Bearer <token>` header.

    Args:
        request: FastAPI request object
        credentials: Parsed bearer credentials (unused beyond OpenAPI documentation)

    Returns:
        The principal the token was issued for

    Raises:
        HTTPException: 401 when the token is missing, malformed, invalid or expired
    """
    auth_service = get_auth_service(request)
    try:
        return auth_service.authenticate_header(request.headers.get("Authorization"))
    except CredentialError as e:
        reason = {MissingTokenError: "missing", MalformedTokenError: "malformed"}.get(type(e), "invalid")
        auth_failures.add(1, {"reason": reason})
        log.debug(f"Rejected bearer credentials ({reason}): {e.message}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": _www_authenticate(e)},
        ) from e


def require_roles(*required_roles: str):
    """Dependency factory to require specific roles.

    Usage:
        @get("/users")
        async def list_users(principal: Principal = Depends(require_roles("admin"))):
            ...

    Args:
        *required_roles: One or more role names required

    Returns:
        FastAPI dependency function that checks the token's role
    """

    async def role_checker(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role.value not in required_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires one of roles: {', '.join(required_roles)}",
            )
        return principal

    return role_checker
