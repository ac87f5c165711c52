"""Bearer-token authentication for the HTTP layer.

Token issuance and verification live in infrastructure.token_service; this
module wires the registered TokenAuthService into each request.
"""

from typing import TYPE_CHECKING, Awaitable, Callable

from starlette.responses import Response

from infrastructure.token_service import CredentialError, InvalidTokenError, MalformedTokenError, MissingTokenError, TokenAuthService

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

__all__ = [
    "CredentialError",
    "InvalidTokenError",
    "MalformedTokenError",
    "MissingTokenError",
    "TokenAuthService",
    "configure_auth_middleware",
]


def configure_auth_middleware(app: "FastAPI") -> None:
    """Inject the TokenAuthService from the DI container into each request state.

    Args:
        app: FastAPI application instance
    """

    @app.middleware("http")
    async def inject_auth_service(request: "Request", call_next: Callable[["Request"], Awaitable[Response]]) -> Response:
        request.state.auth_service = app.state.services.get_required_service(TokenAuthService)
        response = await call_next(request)
        return response
