"""Shared type definitions for code_quarkus.

This module contains enums and dataclasses shared across subpackages to
avoid circular imports.
"""

from dataclasses import dataclass, field
from enum import Enum


class BuildTool(str, Enum):
    """Build system of the generated project."""

    MAVEN = "MAVEN"
    GRADLE = "GRADLE"
    GRADLE_KOTLIN_DSL = "GRADLE_KOTLIN_DSL"

    @property
    def cli_value(self) -> str:
        """Name understood by the Quarkus tooling (e.g. gradle-kotlin-dsl)."""
        return self.value.lower().replace("_", "-")


class SourceType(str, Enum):
    """Language of the generated sources."""

    JAVA = "java"
    KOTLIN = "kotlin"
    SCALA = "scala"


class ProjectState(str, Enum):
    """Lifecycle of a single project creation."""

    IDLE = "idle"
    VALIDATING = "validating"
    MERGING_EXTENSIONS = "merging-extensions"
    GENERATING = "generating"
    PACKAGING = "packaging"
    DONE = "done"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass(frozen=True)
class GenerationRequest:
    """Everything the project generator needs to materialize a project.

    Attributes:
        group_id: Maven groupId of the project.
        artifact_id: Maven artifactId, also the project directory name.
        version: Project version.
        class_name: Fully qualified name of the example resource class.
        path: REST path of the example resource.
        build_tool: Target build system.
        extensions: Canonical extension ids, sorted.
        source_type: Language of the generated sources.
        no_examples: Skip example code.
        codestarts: Additional codestarts to apply.
    """

    group_id: str
    artifact_id: str
    version: str
    class_name: str
    path: str
    build_tool: BuildTool
    extensions: tuple[str, ...] = ()
    source_type: SourceType = SourceType.JAVA
    no_examples: bool = False
    codestarts: tuple[str, ...] = ()


@dataclass
class GenerationResult:
    """Result of a project generation."""

    success: bool
    message: str
    exit_code: int | None = None
    command: str | None = None
    output: str = ""
    details: dict[str, object] = field(default_factory=dict)


__all__ = [
    "BuildTool",
    "GenerationRequest",
    "GenerationResult",
    "ProjectState",
    "SourceType",
]
