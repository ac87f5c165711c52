"""OpenAPI/Swagger configuration for the API sub-app."""

import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.dependencies.models import Dependant
from fastapi.openapi.utils import get_openapi
from fastapi.security.base import SecurityBase
from fastapi.routing import APIRoute
from starlette.routing import Mount

from application.settings import Settings

log = logging.getLogger(__name__)

BEARER_SCHEME_NAME = "bearerAuth"


def configure_mounted_apps_openapi_prefix(app: FastAPI) -> None:
    """Annotate mounted sub-apps with their mount path for OpenAPI path rendering.

    Args:
        app: Root FastAPI application with mounted sub-apps
    """
    for route in app.routes:
        if isinstance(route, Mount) and getattr(route, "app", None) is not None:
            mount_path = route.path or ""
            if mount_path and not mount_path.startswith("/"):
                mount_path = f"/{mount_path}"
            normalized_prefix = mount_path.rstrip("/") if mount_path not in ("", "/") else ""
            log.debug(f"Mounted sub-app '{route}' at '{normalized_prefix}'")
            route.app.state.openapi_path_prefix = normalized_prefix  # type: ignore[attr-defined]


def configure_api_openapi(app: FastAPI, settings: Settings) -> None:
    """Configure OpenAPI security schemes and Swagger UI for the API sub-app."""
    description_path = Path(__file__).parent.parent / "description.md"
    if description_path.exists():
        app.description = description_path.read_text(encoding="utf-8")
    else:
        log.warning(f"API description file not found: {description_path}")

    OpenAPIConfigService.configure_security_schemes(app, settings)
    OpenAPIConfigService.configure_swagger_ui(app)


def _route_is_secured(dependant: Dependant) -> bool:
    """Walk the dependant tree looking for a security scheme dependency.

    The HTTPBearer scheme is a nested dependency pulled in by
    get_current_principal, so the route itself exposes none directly.
    """
    stack: list[Dependant] = [dependant]
    visited: set[int] = set()
    while stack:
        current = stack.pop()
        if id(current) in visited:
            continue
        visited.add(id(current))
        if isinstance(current.call, SecurityBase):
            return True
        stack.extend(current.dependencies)
    return False


class OpenAPIConfigService:
    """Service to configure OpenAPI schema with the bearer security scheme for Swagger UI."""

    @staticmethod
    def configure_security_schemes(app: FastAPI, settings: Settings) -> None:
        """Declare the HTTP bearer scheme and attach it only to routes that require a token.

        Users obtain a token from POST /auth/login and paste it into the
        Swagger "Authorize" dialog.

        Args:
            app: FastAPI application instance
            settings: Application settings
        """

        def custom_openapi() -> dict[str, Any]:
            if app.openapi_schema:
                return app.openapi_schema

            openapi_schema = get_openapi(
                title=app.title,
                version=app.version,
                description=app.description,
                routes=app.routes,
            )

            prefix = getattr(app.state, "openapi_path_prefix", "")
            if prefix:
                openapi_schema["servers"] = [{"url": prefix}]

            components = openapi_schema.setdefault("components", {})
            components.setdefault("securitySchemes", {})[BEARER_SCHEME_NAME] = {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": f"{settings.jwt_algorithm} token from /auth/login, valid {settings.jwt_expiration_days} days",
            }

            secured: set[tuple[str, str]] = set()
            for route in app.routes:
                if not isinstance(route, APIRoute) or not _route_is_secured(route.dependant):
                    continue
                for method in route.methods or []:
                    secured.add((route.path_format, method.lower()))

            for route_path, path_item in openapi_schema.get("paths", {}).items():
                for method, operation in path_item.items():
                    if not isinstance(operation, dict):
                        continue
                    if (route_path, method) in secured:
                        operation["security"] = [{BEARER_SCHEME_NAME: []}]
                    else:
                        operation.pop("security", None)

            app.openapi_schema = openapi_schema
            return app.openapi_schema

        app.openapi = custom_openapi  # type: ignore

    @staticmethod
    def configure_swagger_ui(app: FastAPI) -> None:
        """Persist the pasted bearer token across doc reloads."""
        existing_params = getattr(app, "swagger_ui_parameters", None)
        if not isinstance(existing_params, dict):
            existing_params = {}
        app.swagger_ui_parameters = {
            **existing_params,
            "persistAuthorization": True,
            "docExpansion": "none",
            "operationsSorter": "alpha",
            "tagsSorter": "alpha",
        }
