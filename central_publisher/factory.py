"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from central_publisher.modules.publishing import publishing_router
from . import __version__
from .api import health_router
from .bootstrap import ServiceContainer
from .logging_config import configure_logging
from .settings import Settings, get_settings


def create_app(settings: Optional[Settings] = None, container: Optional[ServiceContainer] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    services = container or ServiceContainer(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):  # pragma: no cover - invoked by FastAPI
        yield
        services.close()

    app = FastAPI(title=settings.app_name, version=__version__, lifespan=lifespan)
    app.include_router(health_router)
    app.include_router(publishing_router)
    app.state.container = services
    return app
