"""Extension catalog endpoint."""

from typing import Any

from fastapi import APIRouter, Depends

from code_quarkus.extensions.catalog import ExtensionCatalog
from web.deps import get_catalog

router = APIRouter()


@router.get("")
def list_extensions_endpoint(
    catalog: ExtensionCatalog = Depends(get_catalog),
) -> list[dict[str, Any]]:
    """List every extension of the catalog, in display order."""
    return catalog.to_public_list()
