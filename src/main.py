"""Main application entry point with SubApp mounting."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from neuroglia.data.infrastructure.mongo import MotorRepository
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_ingestor import CloudEventIngestor
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_middleware import CloudEventMiddleware
from neuroglia.eventing.cloud_events.infrastructure.cloud_event_publisher import CloudEventPublisher
from neuroglia.hosting.web import SubAppConfig, WebApplicationBuilder
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.observability import Observability
from neuroglia.serialization.json import JsonSerializer

from api.services import configure_auth_middleware
from api.services.openapi_config import configure_api_openapi, configure_mounted_apps_openapi_prefix
from application.services import TaskAccessPolicy
from application.settings import app_settings, configure_logging
from domain.repositories import TaskDtoRepository, UserDtoRepository
from infrastructure import DatabaseInitializer, PasswordHasher, TokenAuthService
from integration.models import TaskDto, UserDto
from integration.repositories import InMemoryTaskDtoRepository, InMemoryUserDtoRepository, MotorTaskDtoRepository, MotorUserDtoRepository

configure_logging(log_level=app_settings.log_level)
log = logging.getLogger(__name__)


def _configure_repositories(builder: WebApplicationBuilder) -> None:
    """Register the task store and user directory (MongoDB unless `repository_type=memory`)."""
    if app_settings.repository_type == "memory":
        log.warning("⚠️ Using in-memory repositories: data is lost on restart")
        InMemoryTaskDtoRepository.configure(builder)
        InMemoryUserDtoRepository.configure(builder)
        return

    MotorRepository.configure(
        builder,
        entity_type=TaskDto,
        key_type=str,
        database_name=app_settings.database_name,
        collection_name="tasks",
        domain_repository_type=TaskDtoRepository,
        implementation_type=MotorTaskDtoRepository,
    )
    MotorRepository.configure(
        builder,
        entity_type=UserDto,
        key_type=str,
        database_name=app_settings.database_name,
        collection_name="users",
        domain_repository_type=UserDtoRepository,
        implementation_type=MotorUserDtoRepository,
    )
    DatabaseInitializer.configure(builder)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    The REST API is mounted as a sub-app under /api.

    Returns:
        Configured FastAPI application
    """
    log.debug("🚀 Creating Task Board application...")

    builder = WebApplicationBuilder(app_settings=app_settings)

    # Configure core services
    Mediator.configure(
        builder,
        [
            "application.commands",
            "application.queries",
        ],
    )
    Mapper.configure(
        builder,
        [
            "application.commands",
            "application.queries",
            "integration.models",
        ],
    )
    JsonSerializer.configure(
        builder,
        [
            "domain.models",
            "integration.models",
        ],
    )
    CloudEventPublisher.configure(builder)
    CloudEventIngestor.configure(builder, [])
    Observability.configure(builder)

    _configure_repositories(builder)

    # Application and infrastructure services
    TokenAuthService.configure(builder)
    PasswordHasher.configure(builder)
    TaskAccessPolicy.configure(builder)

    builder.add_sub_app(
        SubAppConfig(
            path="/api",
            name="api",
            title=f"{app_settings.app_name} API",
            description="Task tracking REST API with bearer-token authentication",
            version=app_settings.app_version,
            controllers=["api.controllers"],
            custom_setup=lambda app, service_provider: configure_api_openapi(app, app_settings),
            docs_url="/docs",
        )
    )

    app = builder.build_app_with_lifespan(
        title=app_settings.app_name,
        description="Multi-tenant task tracking service",
        version=app_settings.app_version,
        debug=app_settings.debug,
    )

    configure_mounted_apps_openapi_prefix(app)

    # Configure middlewares
    configure_auth_middleware(app)
    app.add_middleware(CloudEventMiddleware, service_provider=app.state.services)

    if app_settings.enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    log.info("✅ Application created successfully!")
    log.info(f"   - API Docs: http://{app_settings.app_host}:{app_settings.app_port}/api/docs")
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:create_app",
        factory=True,
        host=app_settings.app_host,
        port=app_settings.app_port,
        reload=app_settings.debug,
    )
