"""FastAPI application factory and main app.

This module creates the FastAPI application with all routers and the
shared request-independent state configured.

Web routes are thin proxies to core APIs.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from code_quarkus import __version__
from code_quarkus.config import configure_logging, get_settings
from code_quarkus.extensions.catalog import load_catalog
from code_quarkus.projects.generator import MavenPluginGenerator
from code_quarkus.projects.service import ProjectService
from web.routers import config, download, extensions, health


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager.

    Loads the extension catalog once on startup and builds the project
    service shared by all requests.
    """
    settings = get_settings()
    configure_logging(settings)
    catalog = load_catalog(settings.catalog_path)
    app.state.settings = settings
    app.state.catalog = catalog
    app.state.project_service = ProjectService(
        catalog, MavenPluginGenerator(settings), settings
    )
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application.
    """
    application = FastAPI(
        title="Code Quarkus API",
        description="HTTP API generating Quarkus starter projects",
        version=__version__,
        lifespan=lifespan,
    )

    # Include routers
    application.include_router(health.router, tags=["health"])
    application.include_router(config.router, prefix="/api/config", tags=["config"])
    application.include_router(
        extensions.router, prefix="/api/extensions", tags=["extensions"]
    )
    application.include_router(download.router, tags=["download"])

    return application


# Create the default application instance
app = create_app()
