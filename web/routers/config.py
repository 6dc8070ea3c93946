"""Public configuration endpoint."""

from typing import Any

from fastapi import APIRouter, Depends

from code_quarkus.config import Settings
from code_quarkus.extensions.catalog import ExtensionCatalog
from web.deps import get_app_settings, get_catalog

router = APIRouter()


@router.get("")
def get_config(
    settings: Settings = Depends(get_app_settings),
    catalog: ExtensionCatalog = Depends(get_catalog),
) -> dict[str, Any]:
    """Get the configuration exposed to frontends.

    Returns:
        Public configuration as JSON.
    """
    return {
        "environment": settings.environment,
        "gitCommitId": settings.git_commit_id,
        "gaTrackingId": settings.ga_tracking_id,
        "sentryDSN": settings.sentry_dsn,
        "quarkusVersion": catalog.quarkus_version or settings.quarkus_version,
        "features": list(settings.features),
    }
