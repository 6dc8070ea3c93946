"""Extension catalog module.

This module handles:
- Catalog file schema and validation
- Loading the catalog once at startup
- Short-id expansion and merging with explicit extension ids
"""

from code_quarkus.extensions.catalog import (
    DEFAULT_CATALOG_PATH,
    ExtensionCatalog,
    load_catalog,
)
from code_quarkus.extensions.schema import CatalogSchema, ExtensionSchema

__all__ = [
    "DEFAULT_CATALOG_PATH",
    "CatalogSchema",
    "ExtensionCatalog",
    "ExtensionSchema",
    "load_catalog",
]
