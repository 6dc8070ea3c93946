"""Project service module.

This module provides the high-level project creation API:
- parse_definition(): raw request parameters in, validated definition out
- create(): validated definition in, reproducible zip archive out
- generated_project(): materialize a project in a private temp directory
- Extension merge through the catalog before any generation

Each call owns its temporary directory, which is removed once the caller
is done with it. The catalog is shared and read-only.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from code_quarkus.config import get_settings
from code_quarkus.errors import (
    ArchiveError,
    GenerationError,
    InvalidInputError,
    WorkspaceError,
)
from code_quarkus.projects.archive import zip_directory
from code_quarkus.projects.definition import (
    DEFAULT_ARTIFACT_ID,
    ProjectDefinition,
    parse_project_definition,
)
from code_quarkus.projects.generator import (
    GITHUB_ACTION_CODESTART,
    determine_source_type,
)
from code_quarkus.types import GenerationRequest, ProjectState

if TYPE_CHECKING:
    from code_quarkus.config import Settings
    from code_quarkus.extensions.catalog import ExtensionCatalog
    from code_quarkus.projects.generator import ProjectGenerator

logger = logging.getLogger(__name__)

TMP_PREFIX = "generated-"


class ProjectService:
    """Create starter projects from validated definitions."""

    def __init__(
        self,
        catalog: ExtensionCatalog,
        generator: ProjectGenerator,
        settings: Settings | None = None,
    ) -> None:
        self.catalog = catalog
        self.generator = generator
        self.settings = settings or get_settings()

    def _log_state(self, artifact_id: str, state: ProjectState) -> None:
        logger.debug("Project %s: %s", artifact_id, state.value)

    def parse_definition(self, **params: Any) -> ProjectDefinition:
        """Validate raw request parameters into a project definition.

        Accepts the keyword arguments of parse_project_definition.

        Raises:
            InvalidInputError: If any value is malformed.
        """
        artifact_id = params.get("artifact_id") or DEFAULT_ARTIFACT_ID
        self._log_state(artifact_id, ProjectState.IDLE)
        self._log_state(artifact_id, ProjectState.VALIDATING)
        try:
            return parse_project_definition(**params)
        except InvalidInputError:
            self._log_state(artifact_id, ProjectState.REJECTED)
            raise

    def merge_extensions(self, definition: ProjectDefinition) -> tuple[str, ...]:
        """Resolve the definition's extensions against the catalog.

        Raises:
            UnknownExtensionError: If an extension id or short id is unknown.
        """
        return self.catalog.check_and_merge(
            definition.extensions, definition.short_extensions
        )

    def build_request(
        self,
        definition: ProjectDefinition,
        extensions: tuple[str, ...],
        with_ci: bool = False,
    ) -> GenerationRequest:
        """Build the generator request for a definition."""
        codestarts = (GITHUB_ACTION_CODESTART,) if with_ci else ()
        return GenerationRequest(
            group_id=definition.group_id,
            artifact_id=definition.artifact_id,
            version=definition.version,
            class_name=definition.class_name,
            path=definition.path,
            build_tool=definition.build_tool,
            extensions=extensions,
            source_type=determine_source_type(extensions),
            no_examples=definition.no_examples,
            codestarts=codestarts,
        )

    def _make_tmp_root(self) -> Path:
        """Create the private working directory of one generation.

        Raises:
            WorkspaceError: If the directory cannot be created.
        """
        tmp_dir = self.settings.tmp_dir
        try:
            if tmp_dir is not None:
                tmp_dir.mkdir(parents=True, exist_ok=True)
            return Path(tempfile.mkdtemp(prefix=TMP_PREFIX, dir=tmp_dir))
        except OSError as e:
            raise WorkspaceError(f"Failed to create working directory: {e}") from e

    @contextmanager
    def generated_project(
        self,
        definition: ProjectDefinition,
        with_ci: bool = False,
    ) -> Iterator[Path]:
        """Generate a project into a private temporary directory.

        Args:
            definition: Validated project definition.
            with_ci: Include a CI workflow in the project.

        Yields:
            Path of the project directory, named after the artifactId.

        Raises:
            UnknownExtensionError: If an extension is not in the catalog.
            GenerationError: If the generator raises or reports a failure.
            WorkspaceError: If the working directory cannot be created.
        """
        self._log_state(definition.artifact_id, ProjectState.MERGING_EXTENSIONS)
        try:
            extensions = self.merge_extensions(definition)
        except InvalidInputError:
            self._log_state(definition.artifact_id, ProjectState.REJECTED)
            raise

        request = self.build_request(definition, extensions, with_ci=with_ci)
        try:
            tmp_root = self._make_tmp_root()
        except WorkspaceError as e:
            self._log_state(definition.artifact_id, ProjectState.FAILED)
            logger.error("%s", e.message)
            raise
        location = tmp_root / definition.artifact_id
        try:
            self._log_state(definition.artifact_id, ProjectState.GENERATING)
            try:
                result = self.generator.generate(request, location)
            except GenerationError:
                self._log_state(definition.artifact_id, ProjectState.FAILED)
                raise
            except Exception as e:
                self._log_state(definition.artifact_id, ProjectState.FAILED)
                logger.exception("Generator raised for %s", definition.artifact_id)
                raise GenerationError("Error during project creation") from e

            if not result.success or not location.is_dir():
                self._log_state(definition.artifact_id, ProjectState.FAILED)
                logger.error(
                    "Generation failed for %s: %s",
                    definition.artifact_id,
                    result.message,
                )
                raise GenerationError("Error during project creation")

            logger.info(
                "Generated %s with %d extension(s) in %s",
                definition.artifact_id,
                len(extensions),
                location,
            )
            yield location
        finally:
            shutil.rmtree(tmp_root, ignore_errors=True)

    def create(self, definition: ProjectDefinition, with_ci: bool = False) -> bytes:
        """Create a project and package it as a reproducible zip archive.

        Args:
            definition: Validated project definition.
            with_ci: Include a CI workflow in the project.

        Returns:
            Zip archive content.

        Raises:
            UnknownExtensionError: If an extension is not in the catalog.
            GenerationError: If the generator fails.
            ArchiveError: If packaging fails.
            WorkspaceError: If the working directory cannot be created.
        """
        with self.generated_project(definition, with_ci=with_ci) as location:
            self._log_state(definition.artifact_id, ProjectState.PACKAGING)
            try:
                data = zip_directory(location, self.settings.archive_timestamp)
            except ArchiveError:
                self._log_state(definition.artifact_id, ProjectState.FAILED)
                raise
        self._log_state(definition.artifact_id, ProjectState.DONE)
        return data


__all__ = ["ProjectService"]
