"""Pydantic models for the extension catalog file.

The catalog file lists the Quarkus extensions offered to clients, each
with a short id used in compact download URLs.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

EXTENSION_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_.\-]+:[a-zA-Z0-9_.\-]+$")
SHORT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")


class ExtensionSchema(BaseModel):
    """Schema for a single catalog entry.

    Attributes:
        id: Canonical id, groupId:artifactId.
        short_id: Compact id used in the `s` download parameter.
        name: Display name.
        description: Optional description.
        short_name: Optional abbreviated name.
        category: Category the extension is listed under.
        tags: Status tags (e.g. preview, experimental).
        keywords: Search keywords.
        guide: Optional guide URL.
        provides_example: Whether the extension contributes example code.
        order: Display order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(description="groupId:artifactId", min_length=3, max_length=255)
    short_id: str = Field(description="Short id", min_length=1, max_length=16)
    name: str = Field(description="Display name", min_length=1, max_length=255)
    description: str | None = Field(default=None)
    short_name: str | None = Field(default=None)
    category: str = Field(default="Miscellaneous")
    tags: tuple[str, ...] = Field(default=())
    keywords: tuple[str, ...] = Field(default=())
    guide: str | None = Field(default=None)
    provides_example: bool = Field(default=False)
    order: int = Field(default=0, ge=0)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate id is groupId:artifactId."""
        if not EXTENSION_ID_PATTERN.match(v):
            raise ValueError(
                f"id must match pattern {EXTENSION_ID_PATTERN.pattern}, got '{v}'"
            )
        return v

    @field_validator("short_id")
    @classmethod
    def validate_short_id(cls, v: str) -> str:
        """Validate short id contains no separator."""
        if not SHORT_ID_PATTERN.match(v):
            raise ValueError(
                f"short_id must match pattern {SHORT_ID_PATTERN.pattern}, got '{v}'"
            )
        return v

    @property
    def artifact_id(self) -> str:
        """The artifactId part of the id."""
        return self.id.split(":", 1)[1]


class CatalogSchema(BaseModel):
    """Schema for the whole catalog file."""

    model_config = ConfigDict(extra="forbid")

    quarkus_version: str | None = Field(default=None)
    extensions: list[ExtensionSchema] = Field(default_factory=list)


__all__ = ["CatalogSchema", "ExtensionSchema"]
