"""Shared fixtures for code_quarkus tests.

Provides a substitute project generator so the service and the HTTP layer
can be exercised without Maven or network access.
"""

from pathlib import Path

import pytest

from code_quarkus.config import Settings
from code_quarkus.extensions.catalog import ExtensionCatalog, load_catalog
from code_quarkus.projects.service import ProjectService
from code_quarkus.types import GenerationRequest, GenerationResult


class FakeGenerator:
    """Project generator writing a small, deterministic project tree."""

    def __init__(
        self,
        success: bool = True,
        error: Exception | None = None,
    ) -> None:
        self.success = success
        self.error = error
        self.requests: list[GenerationRequest] = []
        self.locations: list[Path] = []

    def generate(self, request: GenerationRequest, location: Path) -> GenerationResult:
        self.requests.append(request)
        self.locations.append(location)
        if self.error is not None:
            raise self.error
        if not self.success:
            return GenerationResult(success=False, message="boom", exit_code=1)

        location.mkdir()
        (location / "pom.xml").write_text(
            f"<groupId>{request.group_id}</groupId>\n"
            f"<artifactId>{request.artifact_id}</artifactId>\n"
            f"<version>{request.version}</version>\n"
            f"<extensions>{','.join(request.extensions)}</extensions>\n"
            f"<buildTool>{request.build_tool.value}</buildTool>\n"
        )
        mvnw = location / "mvnw"
        mvnw.write_text("#!/bin/sh\nexec mvn \"$@\"\n")
        mvnw.chmod(0o755)

        package_dir = location / "src" / "main" / "java"
        package_dir = package_dir.joinpath(*request.class_name.split(".")[:-1])
        package_dir.mkdir(parents=True)
        simple_name = request.class_name.rsplit(".", 1)[-1]
        (package_dir / f"{simple_name}.java").write_text(
            f'@Path("{request.path}")\npublic class {simple_name} {{}}\n'
        )
        if request.codestarts:
            workflows = location / ".github" / "workflows"
            workflows.mkdir(parents=True)
            (workflows / "ci.yml").write_text("name: CI\n")
        return GenerationResult(success=True, message="ok", exit_code=0)


@pytest.fixture(scope="session")
def catalog() -> ExtensionCatalog:
    """The bundled extension catalog."""
    return load_catalog()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with a private temp directory."""
    return Settings(tmp_dir=tmp_path / "tmp")


@pytest.fixture
def make_generator() -> type[FakeGenerator]:
    """Factory for substitute generators with a chosen outcome."""
    return FakeGenerator


@pytest.fixture
def fake_generator() -> FakeGenerator:
    """A successful substitute generator."""
    return FakeGenerator()


@pytest.fixture
def service(
    catalog: ExtensionCatalog,
    fake_generator: FakeGenerator,
    settings: Settings,
) -> ProjectService:
    """Project service backed by the fake generator."""
    return ProjectService(catalog, fake_generator, settings)
