"""Tests for FastAPI web API.

Uses TestClient to test all endpoints, with the substitute generator from
conftest standing in for the Maven plugin.
"""

import io
import zipfile

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from code_quarkus import __version__
from code_quarkus.config import Settings
from code_quarkus.errors import ArchiveError
from code_quarkus.projects.archive import compute_archive_hash
from code_quarkus.projects.definition import ProjectDefinition
from code_quarkus.projects.service import ProjectService
from code_quarkus.types import BuildTool
from web.routers import config, download, extensions, health


class RecordingProjectService(ProjectService):
    """Project service remembering the definitions it was asked for."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.definitions: list[ProjectDefinition] = []

    def create(self, definition: ProjectDefinition, with_ci: bool = False) -> bytes:
        self.definitions.append(definition)
        return super().create(definition, with_ci=with_ci)

    @property
    def created_project(self) -> ProjectDefinition:
        assert len(self.definitions) == 1
        return self.definitions[0]


def create_test_app() -> FastAPI:
    """Create a minimal FastAPI app for testing without lifespan."""
    application = FastAPI(title="Code Quarkus API", version=__version__)

    # Include routers
    application.include_router(health.router, tags=["health"])
    application.include_router(config.router, prefix="/api/config", tags=["config"])
    application.include_router(
        extensions.router, prefix="/api/extensions", tags=["extensions"]
    )
    application.include_router(download.router, tags=["download"])

    return application


@pytest.fixture
def project_service(catalog, fake_generator, settings):
    """Recording project service backed by the fake generator."""
    return RecordingProjectService(catalog, fake_generator, settings)


@pytest.fixture
def client(catalog, settings, project_service):
    """Create a test client with state set as the lifespan would."""
    app = create_test_app()
    app.state.settings = settings
    app.state.catalog = catalog
    app.state.project_service = project_service

    with TestClient(app) as test_client:
        yield test_client


def assert_zip_response(response, filename: str) -> None:
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert (
        response.headers["content-disposition"]
        == f'attachment; filename="{filename}"'
    )


def zip_names(content: bytes) -> list[str]:
    with zipfile.ZipFile(io.BytesIO(content)) as zf:
        return zf.namelist()


class TestHealthEndpoints:
    """Test health check endpoints."""

    def test_health(self, client):
        """GET /health should return ok status."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == __version__
        assert data["extensions"] > 50

    def test_root(self, client):
        """GET / should return API info."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Code Quarkus API"
        assert "/api/download" in data["endpoints"]


class TestConfigEndpoint:
    """Test /api/config endpoint."""

    def test_default_config(self, client):
        """GET /api/config should return the default public configuration."""
        response = client.get("/api/config")
        assert response.status_code == 200
        data = response.json()
        assert data["environment"] == "dev"
        assert data["gitCommitId"]
        assert data["gaTrackingId"] is None
        assert data["sentryDSN"] is None
        assert data["quarkusVersion"]
        assert data["features"] == []


class TestExtensionsEndpoint:
    """Test /api/extensions endpoint."""

    def test_extension_list(self, client):
        """GET /api/extensions should list the catalog."""
        response = client.get("/api/extensions")
        assert response.status_code == 200
        data = response.json()
        assert len(data) > 50
        assert {"id", "shortId", "name", "category"} <= set(data[0])

    def test_extension_list_order(self, client, catalog):
        """Extensions should be listed in catalog order."""
        data = client.get("/api/extensions").json()
        assert [e["id"] for e in data] == [e.id for e in catalog]


class TestDownloadEndpoint:
    """Test /api/download and /d endpoints."""

    def test_no_parameters(self, client, project_service):
        """No parameters should give the default project."""
        response = client.get("/api/download")
        assert_zip_response(response, "code-with-quarkus.zip")
        assert project_service.created_project == ProjectDefinition()
        assert zip_names(response.content)[0] == "code-with-quarkus/"

    def test_a_few_parameters(self, client, project_service):
        """Given parameters should override the defaults."""
        response = client.get(
            "/api/download",
            params={"a": "test-app-with-a-few-arg", "v": "1.0.0", "s": "D9x.9Ie"},
        )
        assert_zip_response(response, "test-app-with-a-few-arg.zip")
        assert project_service.created_project == ProjectDefinition(
            artifact_id="test-app-with-a-few-arg",
            version="1.0.0",
            short_extensions="D9x.9Ie",
        )

    def test_empty_short_ids(self, client, project_service):
        """s= should be the same as no short ids."""
        response = client.get(
            "/api/download?g=org.acme&a=test-empty-shortids&v=1.0.1&b=MAVEN&s="
        )
        assert_zip_response(response, "test-empty-shortids.zip")
        assert project_service.created_project == ProjectDefinition(
            artifact_id="test-empty-shortids", version="1.0.1"
        )

    def test_empty_extensions(self, client, project_service, fake_generator):
        """e= should give the singleton empty extension set."""
        response = client.get(
            "/api/download?g=org.acme&a=test-empty-ext&v=1.0.1&b=MAVEN"
            "&c=org.test.ExampleResource&e="
        )
        assert_zip_response(response, "test-empty-ext.zip")
        assert project_service.created_project == ProjectDefinition(
            artifact_id="test-empty-ext",
            version="1.0.1",
            class_name="org.test.ExampleResource",
            extensions=frozenset({""}),
        )
        assert fake_generator.requests[0].extensions == ()

    def test_all_parameters(self, client, project_service):
        """All parameters should be honored."""
        response = client.get(
            "/api/download?g=com.toto&a=test-app&v=1.0.0&p=/toto/titi"
            "&c=org.toto.TotoResource&s=7RG.L0j.9Ie"
        )
        assert_zip_response(response, "test-app.zip")
        assert project_service.created_project == ProjectDefinition(
            group_id="com.toto",
            artifact_id="test-app",
            version="1.0.0",
            class_name="org.toto.TotoResource",
            path="/toto/titi",
            short_extensions="7RG.L0j.9Ie",
        )

    def test_short_alias(self, client, project_service):
        """/d should behave like /api/download."""
        query = (
            "g=com.toto&a=test-app&v=1.0.0&p=/toto/titi"
            "&c=org.toto.TotoResource&s=7RG.L0j.9Ie"
        )
        short = client.get(f"/d?{query}")
        full = client.get(f"/api/download?{query}")
        assert_zip_response(short, "test-app.zip")
        assert short.content == full.content
        first, second = project_service.definitions
        assert first == second

    def test_old_extension_syntax(self, client, project_service):
        """Long extension ids should still be accepted alongside short ids."""
        response = client.get(
            "/api/download?g=com.toto&a=test-app&v=1.0.0&p=/toto/titi"
            "&c=com.toto.TotoResource&e=io.quarkus:quarkus-resteasy&s=9Ie"
        )
        assert_zip_response(response, "test-app.zip")
        assert project_service.created_project == ProjectDefinition(
            group_id="com.toto",
            artifact_id="test-app",
            version="1.0.0",
            class_name="com.toto.TotoResource",
            path="/toto/titi",
            extensions=frozenset({"io.quarkus:quarkus-resteasy"}),
            short_extensions="9Ie",
        )

    def test_long_and_short_ids_give_same_project(self, client):
        """e=<id> and s=<short id> should produce the same archive."""
        long_form = client.get("/api/download?e=io.quarkus:quarkus-resteasy")
        short_form = client.get("/api/download?s=9Ie")
        assert long_form.status_code == short_form.status_code == 200
        assert long_form.content == short_form.content

    def test_repeated_and_comma_separated_extensions(self, client, fake_generator):
        """e may be repeated or comma separated."""
        client.get("/api/download?e=quarkus-arc&e=quarkus-resteasy")
        client.get("/api/download?e=quarkus-arc,quarkus-resteasy")
        first, second = fake_generator.requests
        assert first.extensions == second.extensions == (
            "io.quarkus:quarkus-arc",
            "io.quarkus:quarkus-resteasy",
        )

    def test_gradle(self, client, project_service, fake_generator):
        """b=GRADLE should generate a Gradle project."""
        response = client.get(
            "/api/download?b=GRADLE&a=test-app-with-a-few-arg&v=1.0.0&s=pDS.L0j"
        )
        assert_zip_response(response, "test-app-with-a-few-arg.zip")
        assert project_service.created_project == ProjectDefinition(
            artifact_id="test-app-with-a-few-arg",
            version="1.0.0",
            build_tool=BuildTool.GRADLE,
            short_extensions="pDS.L0j",
        )
        assert fake_generator.requests[0].build_tool is BuildTool.GRADLE

    def test_no_examples(self, client, fake_generator):
        """ne=true should ask for a project without example code."""
        response = client.get("/api/download?ne=true")
        assert response.status_code == 200
        assert fake_generator.requests[0].no_examples is True

    def test_deterministic(self, client):
        """Two identical requests should return identical archives."""
        first = client.get("/api/download?a=demo&s=9Ie")
        second = client.get("/api/download?a=demo&s=9Ie")
        assert first.content == second.content
        assert first.headers["etag"] == second.headers["etag"]
        assert first.headers["etag"] == f'"{compute_archive_hash(first.content)}"'

    @pytest.mark.parametrize(
        ("query", "field"),
        [
            ("g=org.acme&a=&pv=1.0.0&c=org.acme.TotoResource&s=98e", "a"),
            ("g=org.acme.&s=98e", "g"),
            ("a=Art.&s=98e", "a"),
            ("p=invalid&s=98e", "p"),
            ("c=com.1e&s=98e", "c"),
            ("b=ANT", "b"),
            ("s=inv", "s"),
            ("e=inv", "e"),
        ],
    )
    def test_invalid_input(self, client, fake_generator, query, field):
        """Invalid input should give 400 without invoking the generator."""
        response = client.get(f"/api/download?{query}")
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["field"] == field
        assert detail["code"] in ("invalid_input", "unknown_extension")
        assert fake_generator.requests == []

    def test_invalid_input_on_short_alias(self, client):
        """/d should validate the same way."""
        response = client.get("/d?s=inv")
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "unknown_extension"


class TestDownloadFailures:
    """Test server-side failures of the download endpoint."""

    @pytest.fixture
    def failing_client(self, catalog, settings, make_generator):
        app = create_test_app()
        app.state.settings = settings
        app.state.catalog = catalog
        app.state.project_service = ProjectService(
            catalog, make_generator(error=RuntimeError("secret detail")), settings
        )
        with TestClient(app) as test_client:
            yield test_client

    def test_generator_failure(self, failing_client):
        """Generator failures should give 500 with a generic message."""
        response = failing_client.get("/api/download")
        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["message"] == "Error during project creation"
        assert "secret detail" not in response.text

    def test_archive_failure(self, client, project_service, monkeypatch):
        """Packaging failures should give 500."""

        def broken_zip(*args, **kwargs):
            raise ArchiveError("cannot zip")

        monkeypatch.setattr("code_quarkus.projects.service.zip_directory", broken_zip)
        response = client.get("/api/download")
        assert response.status_code == 500
        assert response.json()["detail"]["code"] == "archive_failed"

    def test_unusable_tmp_dir(self, catalog, fake_generator, tmp_path):
        """A working directory that cannot be created should give 500."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        settings = Settings(tmp_dir=blocker / "sub")
        app = create_test_app()
        app.state.settings = settings
        app.state.catalog = catalog
        app.state.project_service = ProjectService(catalog, fake_generator, settings)

        with TestClient(app) as test_client:
            response = test_client.get("/api/download")

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail == {
            "code": "io_error",
            "message": "Error during project creation",
        }
        assert "blocker" not in response.text
        assert fake_generator.requests == []
