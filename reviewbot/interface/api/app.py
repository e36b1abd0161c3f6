"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reviewbot.config import Settings
from reviewbot.interface.api.errors import register_error_handlers
from reviewbot.interface.api.routes import auth, health, users
from reviewbot.util.di.container import create_container
from reviewbot.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire must be configured before calling this function; start_app.py
    does it in production and tests/conftest.py in tests.

    Args:
        container: DI container to serve from. A production container is
            built (and closed on shutdown) when omitted.

    Returns:
        Configured application
    """
    settings = Settings()
    owns_container = container is None
    if container is None:
        container = create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_container:
            await container.close()

    instrument_httpx()

    app_instance = FastAPI(
        title="Review Bot API",
        description="Account management and federated login for Review Bot",
        version="1.0.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.api.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
    )

    setup_dishka(container, app_instance)
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(users.router)

    return app_instance
