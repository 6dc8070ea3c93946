"""Extension catalog loading and lookups.

The catalog is loaded once at startup and never mutated afterwards, so a
single instance can be shared by concurrent requests without locking.

This module handles:
- Loading and validating the catalog YAML file
- Resolving extension ids, bare artifactIds and short ids
- Expanding the short-id string and merging it with explicit ids
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import ValidationError

from code_quarkus.errors import CatalogError, UnknownExtensionError
from code_quarkus.extensions.schema import CatalogSchema, ExtensionSchema

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "extensions.yaml"
SHORT_ID_SEPARATOR = "."


class ExtensionCatalog:
    """Immutable, read-only view of the available extensions."""

    def __init__(
        self,
        extensions: Iterable[ExtensionSchema],
        quarkus_version: str | None = None,
    ) -> None:
        entries = tuple(sorted(extensions, key=lambda e: (e.order, e.id)))
        by_id: dict[str, ExtensionSchema] = {}
        by_short_id: dict[str, ExtensionSchema] = {}
        by_artifact_id: dict[str, ExtensionSchema] = {}
        ambiguous: set[str] = set()

        for ext in entries:
            if ext.id in by_id:
                raise CatalogError(f"Duplicate extension id in catalog: {ext.id}")
            if ext.short_id in by_short_id:
                raise CatalogError(
                    f"Duplicate short id in catalog: {ext.short_id} "
                    f"({by_short_id[ext.short_id].id}, {ext.id})"
                )
            by_id[ext.id] = ext
            by_short_id[ext.short_id] = ext
            # Bare artifactIds only resolve when unambiguous
            if ext.artifact_id in by_artifact_id or ext.artifact_id in ambiguous:
                by_artifact_id.pop(ext.artifact_id, None)
                ambiguous.add(ext.artifact_id)
            else:
                by_artifact_id[ext.artifact_id] = ext

        self._extensions = entries
        self._by_id: Mapping[str, ExtensionSchema] = MappingProxyType(by_id)
        self._by_short_id: Mapping[str, ExtensionSchema] = MappingProxyType(
            by_short_id
        )
        self._by_artifact_id: Mapping[str, ExtensionSchema] = MappingProxyType(
            by_artifact_id
        )
        self.quarkus_version = quarkus_version

    def __len__(self) -> int:
        return len(self._extensions)

    def __iter__(self) -> Iterator[ExtensionSchema]:
        return iter(self._extensions)

    @property
    def extensions(self) -> tuple[ExtensionSchema, ...]:
        """All extensions, in display order."""
        return self._extensions

    def get(self, extension_id: str) -> ExtensionSchema | None:
        """Get an extension by canonical id."""
        return self._by_id.get(extension_id)

    def get_by_short_id(self, short_id: str) -> ExtensionSchema | None:
        """Get an extension by short id."""
        return self._by_short_id.get(short_id)

    def find(self, key: str) -> ExtensionSchema | None:
        """Find an extension by id, bare artifactId or short id."""
        return (
            self._by_id.get(key)
            or self._by_artifact_id.get(key)
            or self._by_short_id.get(key)
        )

    def resolve_extension_id(self, raw: str) -> str:
        """Resolve an explicit extension id to its canonical form.

        Args:
            raw: groupId:artifactId or bare artifactId.

        Returns:
            Canonical extension id.

        Raises:
            UnknownExtensionError: If the id is not in the catalog.
        """
        ext = self._by_id.get(raw) if ":" in raw else self._by_artifact_id.get(raw)
        if ext is None:
            raise UnknownExtensionError("e", raw)
        return ext.id

    def expand_short_extensions(self, encoded: str) -> list[str]:
        """Expand a dot separated short-id string to canonical ids.

        Args:
            encoded: Short ids joined by '.', possibly empty.

        Returns:
            Canonical ids in the order they were encoded.

        Raises:
            UnknownExtensionError: If a short id is not in the catalog.
        """
        if not encoded:
            return []
        ids: list[str] = []
        for short_id in encoded.split(SHORT_ID_SEPARATOR):
            ext = self._by_short_id.get(short_id)
            if ext is None:
                raise UnknownExtensionError("s", short_id)
            ids.append(ext.id)
        return ids

    def check_and_merge(
        self,
        extensions: Iterable[str],
        short_extensions: str,
    ) -> tuple[str, ...]:
        """Merge explicit extension ids with the expanded short-id string.

        Blank explicit ids are ignored.

        Returns:
            Sorted, de-duplicated canonical extension ids.

        Raises:
            UnknownExtensionError: If any id or short id is unknown.
        """
        merged = {self.resolve_extension_id(e) for e in extensions if e.strip()}
        merged.update(self.expand_short_extensions(short_extensions))
        logger.debug("Merged extensions: %s", sorted(merged))
        return tuple(sorted(merged))

    def to_public_list(self) -> list[dict[str, Any]]:
        """Render the catalog as served to frontends."""
        return [
            {
                "id": ext.id,
                "shortId": ext.short_id,
                "name": ext.name,
                "description": ext.description,
                "shortName": ext.short_name,
                "category": ext.category,
                "tags": list(ext.tags),
                "keywords": list(ext.keywords),
                "guide": ext.guide,
                "providesExample": ext.provides_example,
                "order": ext.order,
            }
            for ext in self._extensions
        ]


def load_catalog(path: Path | None = None) -> ExtensionCatalog:
    """Load and validate an extension catalog from a YAML file.

    Args:
        path: Catalog file; the bundled catalog is used if None.

    Returns:
        ExtensionCatalog instance.

    Raises:
        CatalogError: If the file cannot be read or is invalid.
    """
    catalog_path = path or DEFAULT_CATALOG_PATH
    try:
        with open(catalog_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Failed to read catalog {catalog_path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(
            f"Expected a YAML mapping in {catalog_path}, got {type(data).__name__}"
        )

    try:
        schema = CatalogSchema.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog {catalog_path}: {e}") from e

    catalog = ExtensionCatalog(
        schema.extensions, quarkus_version=schema.quarkus_version
    )
    logger.info("Loaded %d extensions from %s", len(catalog), catalog_path)
    return catalog


__all__ = [
    "DEFAULT_CATALOG_PATH",
    "ExtensionCatalog",
    "load_catalog",
]
