"""Shared state dependencies for FastAPI.

The extension catalog and the project service are built once in the
application lifespan and stored on app.state. Route handlers receive them
through FastAPI dependency injection, which lets tests swap in their own
instances without touching module globals.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request

from code_quarkus.config import Settings, get_settings
from code_quarkus.extensions.catalog import ExtensionCatalog
from code_quarkus.projects.service import ProjectService


def get_catalog(request: Request) -> ExtensionCatalog:
    """Get the extension catalog from app state.

    Args:
        request: FastAPI request object.

    Returns:
        Shared, read-only extension catalog.
    """
    catalog: Any = request.app.state.catalog
    return catalog  # type: ignore[no-any-return]


def get_project_service(request: Request) -> ProjectService:
    """Get the project service from app state.

    Args:
        request: FastAPI request object.

    Returns:
        Shared project service.
    """
    service: Any = request.app.state.project_service
    return service  # type: ignore[no-any-return]


def get_app_settings(request: Request) -> Settings:
    """Get settings from app state, falling back to the environment."""
    settings: Any = getattr(request.app.state, "settings", None)
    if settings is None:
        return get_settings()
    return settings  # type: ignore[no-any-return]
