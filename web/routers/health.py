"""Liveness and service information endpoints.

- GET /health - Catalog-backed liveness probe
- GET / - Service name, version and entry points
"""

from typing import Any

from fastapi import APIRouter, Depends

from code_quarkus import __version__
from code_quarkus.extensions.catalog import ExtensionCatalog
from web.deps import get_catalog

router = APIRouter()

SERVICE_NAME = "Code Quarkus API"


@router.get("/health")
def health(catalog: ExtensionCatalog = Depends(get_catalog)) -> dict[str, Any]:
    """Report the service as up once the extension catalog is loaded."""
    return {
        "status": "ok",
        "version": __version__,
        "extensions": len(catalog),
    }


@router.get("/")
def root() -> dict[str, Any]:
    """Describe the service and where to start."""
    return {
        "name": SERVICE_NAME,
        "version": __version__,
        "endpoints": ["/api/download", "/api/config", "/api/extensions"],
    }
