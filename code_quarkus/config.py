"""Configuration settings for code_quarkus.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Zip entries cannot carry timestamps before 1980
ZIP_EPOCH = datetime(1980, 1, 1, tzinfo=timezone.utc)
DEFAULT_ARCHIVE_TIMESTAMP = datetime(2021, 1, 1, tzinfo=timezone.utc)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the CODE_QUARKUS_
    prefix. CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="CODE_QUARKUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Public configuration
    environment: str = Field(
        default="dev",
        description="Deployment environment name",
    )
    git_commit_id: str = Field(
        default="unknown",
        description="Commit id of the deployed revision",
    )
    ga_tracking_id: str | None = Field(
        default=None,
        description="Google Analytics tracking id",
    )
    sentry_dsn: str | None = Field(
        default=None,
        description="Sentry DSN for frontend error reporting",
    )
    features: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Enabled feature flags (comma separated)",
    )

    # Generator
    quarkus_version: str = Field(
        default="3.8.4",
        description="Quarkus platform version used for generated projects",
    )
    platform_group_id: str = Field(
        default="io.quarkus.platform",
        description="Group id of the Quarkus platform and its Maven plugin",
    )
    maven_executable: str = Field(
        default="mvn",
        description="Maven executable used to run the project generator",
    )
    java_version: str = Field(
        default="17",
        description="Java release targeted by generated projects",
    )
    generation_timeout: int = Field(
        default=300,
        ge=10,
        description="Timeout for a single project generation (seconds)",
    )

    # Paths
    tmp_dir: Path | None = Field(
        default=None,
        description="Temporary directory for generated projects "
        "(uses system default if not set)",
    )
    catalog_path: Path | None = Field(
        default=None,
        description="Extension catalog YAML file (uses bundled catalog if not set)",
    )

    # Packaging
    archive_timestamp: datetime = Field(
        default=DEFAULT_ARCHIVE_TIMESTAMP,
        description="Fixed modification time applied to every archive entry",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("features", mode="before")
    @classmethod
    def split_features(cls, v: Any) -> Any:
        """Accept feature flags as a comma separated string."""
        if isinstance(v, str):
            return [f.strip() for f in v.split(",") if f.strip()]
        return v

    @field_validator("archive_timestamp")
    @classmethod
    def validate_archive_timestamp(cls, v: datetime) -> datetime:
        """Validate the archive timestamp is representable and in the past."""
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        if v < ZIP_EPOCH:
            raise ValueError("archive_timestamp must not be before 1980-01-01")
        if v > datetime.now(timezone.utc) - timedelta(days=1):
            raise ValueError("archive_timestamp must be at least one day in the past")
        return v


def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


def configure_logging(
    settings: Settings | None = None,
    handler: logging.Handler | None = None,
) -> None:
    """Configure root logging from settings.

    Args:
        settings: Optional settings instance; uses default if not provided.
        handler: Optional handler replacing the default stream handler.
    """
    if settings is None:
        settings = get_settings()
    if handler is None:
        logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    else:
        logging.basicConfig(
            level=settings.log_level,
            format="%(message)s",
            handlers=[handler],
        )


__all__ = [
    "DEFAULT_ARCHIVE_TIMESTAMP",
    "Settings",
    "configure_logging",
    "get_settings",
    "print_settings_json",
]
