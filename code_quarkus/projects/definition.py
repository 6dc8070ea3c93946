"""Pydantic model for project definitions.

A project definition is the validated, immutable form of the parameters a
client sends to request a starter project. Validation here is purely
syntactic; extension ids are checked against the catalog later, when the
extensions are merged.
"""

import re
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from code_quarkus.errors import InvalidInputError
from code_quarkus.types import BuildTool

DEFAULT_GROUP_ID = "org.acme"
DEFAULT_ARTIFACT_ID = "code-with-quarkus"
DEFAULT_VERSION = "1.0.0-SNAPSHOT"
DEFAULT_CLASS_NAME = "org.acme.ExampleResource"
DEFAULT_PATH = "/hello"
DEFAULT_BUILD_TOOL = BuildTool.MAVEN

# Dotted Java identifier path, e.g. org.acme or org.acme.ExampleResource
GROUP_ID_PATTERN = re.compile(r"^([a-zA-Z_$][a-zA-Z\d_$]*\.)*[a-zA-Z_$][a-zA-Z\d_$]*$")
CLASS_NAME_PATTERN = GROUP_ID_PATTERN
ARTIFACT_ID_PATTERN = re.compile(r"^[a-z]([a-z0-9._-]*[a-z0-9_-])?$")
VERSION_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._+-]*$")
_PATH_SEGMENT = r"[a-zA-Z0-9\-._~%!$&'()*+,;=:@]+"
PATH_PATTERN = re.compile(rf"^/({_PATH_SEGMENT}(/{_PATH_SEGMENT})*/?)?$")
SHORT_EXTENSIONS_PATTERN = re.compile(r"^([A-Za-z0-9_-]+(\.[A-Za-z0-9_-]+)*)?$")
EXTENSION_ID_PATTERN = re.compile(r"^([A-Za-z0-9_.-]+:)?[A-Za-z0-9_.-]+$")

# Field name -> query parameter name
QUERY_PARAMS = {
    "group_id": "g",
    "artifact_id": "a",
    "version": "v",
    "class_name": "c",
    "path": "p",
    "build_tool": "b",
    "extensions": "e",
    "short_extensions": "s",
    "no_examples": "ne",
}


class ProjectDefinition(BaseModel):
    """Validated request for a starter project.

    Attributes:
        group_id: Maven groupId.
        artifact_id: Maven artifactId, also the archive and directory name.
        version: Project version.
        class_name: Fully qualified name of the example resource class.
        path: REST path of the example resource.
        build_tool: Target build system.
        extensions: Explicit extension ids (groupId:artifactId or artifactId).
        short_extensions: Dot separated short ids, expanded via the catalog.
        no_examples: Skip example code.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    group_id: str = Field(default=DEFAULT_GROUP_ID, description="Maven groupId")
    artifact_id: str = Field(
        default=DEFAULT_ARTIFACT_ID, description="Maven artifactId"
    )
    version: str = Field(default=DEFAULT_VERSION, description="Project version")
    class_name: str = Field(
        default=DEFAULT_CLASS_NAME, description="Example resource class name"
    )
    path: str = Field(default=DEFAULT_PATH, description="Example resource path")
    build_tool: BuildTool = Field(default=DEFAULT_BUILD_TOOL)
    extensions: frozenset[str] = Field(default_factory=frozenset)
    short_extensions: str = Field(default="", description="Encoded short ids")
    no_examples: bool = Field(default=False)

    @field_validator("group_id")
    @classmethod
    def validate_group_id(cls, v: str) -> str:
        """Validate groupId is a dotted Java identifier path."""
        if not GROUP_ID_PATTERN.match(v):
            raise ValueError(f"groupId must match {GROUP_ID_PATTERN.pattern}")
        return v

    @field_validator("artifact_id")
    @classmethod
    def validate_artifact_id(cls, v: str) -> str:
        """Validate artifactId is lowercase and does not end with a dot."""
        if not ARTIFACT_ID_PATTERN.match(v):
            raise ValueError(f"artifactId must match {ARTIFACT_ID_PATTERN.pattern}")
        return v

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate version contains no whitespace or separators."""
        if not VERSION_PATTERN.match(v):
            raise ValueError(f"version must match {VERSION_PATTERN.pattern}")
        return v

    @field_validator("class_name")
    @classmethod
    def validate_class_name(cls, v: str) -> str:
        """Validate className is a dotted Java identifier path."""
        if not CLASS_NAME_PATTERN.match(v):
            raise ValueError(f"className must match {CLASS_NAME_PATTERN.pattern}")
        return v

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate path is an absolute URL path."""
        if not PATH_PATTERN.match(v):
            raise ValueError("path must be an absolute URL path (e.g. '/hello')")
        return v

    @field_validator("short_extensions")
    @classmethod
    def validate_short_extensions(cls, v: str) -> str:
        """Validate short ids are dot separated alphanumeric tokens."""
        if not SHORT_EXTENSIONS_PATTERN.match(v):
            raise ValueError(
                f"shortExtensions must match {SHORT_EXTENSIONS_PATTERN.pattern}"
            )
        return v

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: frozenset[str]) -> frozenset[str]:
        """Validate each extension id; empty ids are tolerated."""
        for ext in v:
            if ext and not EXTENSION_ID_PATTERN.match(ext):
                raise ValueError(f"invalid extension id '{ext}'")
        return v


def split_extension_ids(values: Iterable[str] | None) -> frozenset[str] | None:
    """Collect extension ids from repeated and comma separated values.

    Args:
        values: Raw `e` parameter values, or None if the parameter is absent.

    Returns:
        Set of extension ids, or None if no value was given. A present but
        empty value yields {""}.
    """
    if values is None:
        return None
    ids: set[str] = set()
    for value in values:
        ids.update(part.strip() for part in value.split(","))
    return frozenset(ids)


def parse_project_definition(
    group_id: str | None = None,
    artifact_id: str | None = None,
    version: str | None = None,
    class_name: str | None = None,
    path: str | None = None,
    build_tool: str | None = None,
    extensions: Iterable[str] | None = None,
    short_extensions: str | None = None,
    no_examples: bool | str | None = None,
) -> ProjectDefinition:
    """Build a project definition from raw parameter values.

    Parameters left as None keep their default value. no_examples also
    accepts the usual boolean strings ("true", "false", "1", "0").

    Returns:
        Validated ProjectDefinition.

    Raises:
        InvalidInputError: If any value is malformed.
    """
    raw: dict[str, Any] = {
        "group_id": group_id,
        "artifact_id": artifact_id,
        "version": version,
        "class_name": class_name,
        "path": path,
        "build_tool": build_tool,
        "extensions": split_extension_ids(extensions),
        "short_extensions": short_extensions,
        "no_examples": no_examples,
    }
    data = {key: value for key, value in raw.items() if value is not None}
    try:
        return ProjectDefinition.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "request"
        param = QUERY_PARAMS.get(field, field)
        raise InvalidInputError(
            param,
            f"Invalid value for '{param}' ({field}): {error['msg']}",
        ) from None


__all__ = [
    "DEFAULT_ARTIFACT_ID",
    "DEFAULT_BUILD_TOOL",
    "DEFAULT_CLASS_NAME",
    "DEFAULT_GROUP_ID",
    "DEFAULT_PATH",
    "DEFAULT_VERSION",
    "QUERY_PARAMS",
    "ProjectDefinition",
    "parse_project_definition",
    "split_extension_ids",
]
