"""Router modules for FastAPI web API."""

from web.routers import config, download, extensions, health

__all__ = ["config", "download", "extensions", "health"]
