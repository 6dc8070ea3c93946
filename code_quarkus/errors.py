"""Error definitions for code_quarkus.

This module defines exception types carrying stable codes that the HTTP
layer and the CLI surface to clients.
"""

from typing import Any

# Error code constants
INVALID_INPUT = "invalid_input"
UNKNOWN_EXTENSION = "unknown_extension"
GENERATION_FAILED = "generation_failed"
ARCHIVE_FAILED = "archive_failed"
CATALOG_ERROR = "catalog_error"
IO_ERROR = "io_error"


class CodeQuarkusError(Exception):
    """Base error for code_quarkus operations."""

    def __init__(self, message: str, code: str = "code_quarkus_error") -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"code": self.code, "message": self.message}


class InvalidInputError(CodeQuarkusError):
    """Raised when a request parameter is malformed."""

    def __init__(self, field: str, message: str, code: str = INVALID_INPUT) -> None:
        super().__init__(message, code=code)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, including the offending field."""
        result = super().to_dict()
        result["field"] = self.field
        return result


class UnknownExtensionError(InvalidInputError):
    """Raised when an extension id or short id is not in the catalog."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(
            field,
            f"Unknown extension: {value}",
            code=UNKNOWN_EXTENSION,
        )
        self.value = value


class GenerationError(CodeQuarkusError):
    """Raised when the project generator fails."""

    def __init__(self, message: str, code: str = GENERATION_FAILED) -> None:
        super().__init__(message, code=code)


class ArchiveError(CodeQuarkusError):
    """Raised when packaging the generated project fails."""

    def __init__(self, message: str, code: str = ARCHIVE_FAILED) -> None:
        super().__init__(message, code=code)


class WorkspaceError(CodeQuarkusError):
    """Raised when the working directory of a generation cannot be set up."""

    def __init__(self, message: str, code: str = IO_ERROR) -> None:
        super().__init__(message, code=code)


class CatalogError(CodeQuarkusError):
    """Raised when the extension catalog cannot be loaded."""

    def __init__(self, message: str, code: str = CATALOG_ERROR) -> None:
        super().__init__(message, code=code)


__all__ = [
    "ARCHIVE_FAILED",
    "CATALOG_ERROR",
    "GENERATION_FAILED",
    "INVALID_INPUT",
    "IO_ERROR",
    "UNKNOWN_EXTENSION",
    "ArchiveError",
    "CatalogError",
    "CodeQuarkusError",
    "GenerationError",
    "InvalidInputError",
    "UnknownExtensionError",
    "WorkspaceError",
]
