"""sqlite-serve API — FastAPI application factory.

Run with:  uvicorn --factory sqlite_serve.main:create_app

Invariants:
    - Routes file loaded once, in create_app; Route objects are read-only afterwards
    - Health probes registered before configured routes so they cannot be shadowed
    - Global error handlers map SqliteServeError -> HTML error page or JSON envelope
    - Logging configured on startup via lifespan

Design Decisions:
    - Factory over module-level app: tests build apps from temporary settings
    - Lifespan over @app.on_event
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from sqlite_serve.api.error_handlers import register_error_handlers
from sqlite_serve.api.routes import health
from sqlite_serve.api.routes.sql_routes import build_router
from sqlite_serve.config import Settings, get_settings
from sqlite_serve.infrastructure.observability import setup_logging
from sqlite_serve.services.route_registry import load_registry
from sqlite_serve.services.serve_route import build_processor

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    registry = app.state.registry
    logger.info(
        f"sqlite-serve started with {len(registry.routes)} routes "
        f"({len(registry.failures)} disabled)",
    )
    yield
    logger.info("sqlite-serve shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    registry = load_registry(settings)

    app = FastAPI(title="sqlite-serve", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.registry = registry

    # Probes first so configured paths cannot shadow them
    app.include_router(health.router)
    app.include_router(build_router(registry, build_processor()))

    register_error_handlers(app)
    return app
