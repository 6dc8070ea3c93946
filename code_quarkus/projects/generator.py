"""Project generator invocation.

The scaffolding itself is done by the Quarkus tooling. This module defines
the capability the service depends on and the default implementation,
which runs the `create` goal of the Quarkus Maven plugin.

This module handles:
- Determining the source language from the selected extensions
- Composing the Maven plugin `create` command
- Executing the generator with subprocess and a timeout
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from code_quarkus.errors import GenerationError
from code_quarkus.types import GenerationRequest, GenerationResult, SourceType

if TYPE_CHECKING:
    from code_quarkus.config import Settings

logger = logging.getLogger(__name__)

MAVEN_PLUGIN_ARTIFACT_ID = "quarkus-maven-plugin"
GITHUB_ACTION_CODESTART = "tooling-github-action"

# Lines of generator output kept in results and logs
OUTPUT_TAIL_LINES = 40


class ProjectGenerator(Protocol):
    """Capability materializing a project on disk."""

    def generate(
        self, request: GenerationRequest, location: Path
    ) -> GenerationResult:
        """Materialize the project described by request at location.

        The location does not exist yet; its parent does.
        """
        ...


def determine_source_type(extensions: Iterable[str]) -> SourceType:
    """Determine the source language implied by the selected extensions.

    Args:
        extensions: Canonical extension ids.

    Returns:
        KOTLIN or SCALA if the matching extension is selected, else JAVA.
    """
    artifact_ids = {ext.rsplit(":", 1)[-1] for ext in extensions}
    if "quarkus-kotlin" in artifact_ids:
        return SourceType.KOTLIN
    if "quarkus-scala" in artifact_ids:
        return SourceType.SCALA
    return SourceType.JAVA


def compose_create_command(
    request: GenerationRequest,
    settings: Settings,
) -> list[str]:
    """Compose the Maven plugin `create` command for a request.

    The plugin has no language option: it picks Kotlin or Scala sources
    from the quarkus-kotlin and quarkus-scala extensions, so
    request.source_type is only reported, never passed on.

    Args:
        request: Generation request.
        settings: Settings providing the platform and tooling versions.

    Returns:
        Command as list of strings suitable for subprocess.
    """
    plugin = (
        f"{settings.platform_group_id}:{MAVEN_PLUGIN_ARTIFACT_ID}:"
        f"{settings.quarkus_version}:create"
    )
    cmd = [settings.maven_executable, "--batch-mode", "--quiet", plugin]

    cmd.append(f"-DprojectGroupId={request.group_id}")
    cmd.append(f"-DprojectArtifactId={request.artifact_id}")
    cmd.append(f"-DprojectVersion={request.version}")
    cmd.append(f"-DbuildTool={request.build_tool.cli_value}")
    cmd.append(f"-DjavaVersion={settings.java_version}")

    if request.extensions:
        cmd.append(f"-Dextensions={','.join(request.extensions)}")

    if request.no_examples:
        cmd.append("-DnoCode")
    else:
        cmd.append(f"-DclassName={request.class_name}")
        cmd.append(f"-Dpath={request.path}")

    if request.codestarts:
        cmd.append(f"-Dcodestarts={','.join(request.codestarts)}")

    return cmd


def _tail(output: str | bytes | None, lines: int = OUTPUT_TAIL_LINES) -> str:
    if not output:
        return ""
    if isinstance(output, bytes):
        output = output.decode("utf-8", errors="replace")
    return "\n".join(output.splitlines()[-lines:])


class MavenPluginGenerator:
    """Generate projects with the Quarkus Maven plugin."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def generate(
        self, request: GenerationRequest, location: Path
    ) -> GenerationResult:
        """Run the plugin in the parent of location.

        The plugin creates a directory named after the artifactId, so
        location must end with request.artifact_id.

        Raises:
            GenerationError: If the generator cannot be run or times out.
        """
        if location.name != request.artifact_id:
            raise GenerationError(
                f"Project location {location} does not match artifactId "
                f"{request.artifact_id}"
            )

        cmd = compose_create_command(request, self.settings)
        cmd_str = shlex.join(cmd)
        timeout = self.settings.generation_timeout
        logger.info("Generating project: %s", cmd_str)
        logger.debug(
            "Working directory: %s, source type: %s",
            location.parent,
            request.source_type.value,
        )

        try:
            result = subprocess.run(
                cmd,
                cwd=location.parent,
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            logger.error(
                "Generation timed out after %d seconds: %s", timeout, _tail(e.stdout)
            )
            raise GenerationError(
                f"Project generation timed out after {timeout} seconds",
                code="generation_timeout",
            ) from e
        except OSError as e:
            logger.error("Failed to execute generator: %s", e)
            raise GenerationError(
                f"Failed to execute generator: {e}",
                code="execution_error",
            ) from e

        output = _tail(result.stdout + result.stderr)
        if result.returncode != 0:
            message = f"Generator failed with exit code {result.returncode}"
            logger.error("%s\n%s", message, output)
            return GenerationResult(
                success=False,
                message=message,
                exit_code=result.returncode,
                command=cmd_str,
                output=output,
            )

        if not location.is_dir():
            message = f"Generator did not create {location}"
            logger.error(message)
            return GenerationResult(
                success=False,
                message=message,
                exit_code=result.returncode,
                command=cmd_str,
                output=output,
            )

        return GenerationResult(
            success=True,
            message="Project generated",
            exit_code=result.returncode,
            command=cmd_str,
            output=output,
        )


__all__ = [
    "GITHUB_ACTION_CODESTART",
    "MavenPluginGenerator",
    "ProjectGenerator",
    "compose_create_command",
    "determine_source_type",
]
