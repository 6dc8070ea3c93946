"""FastAPI web application for code-quarkus.

This module provides the HTTP API used by the project generator frontend.

All business logic is delegated to core modules in code_quarkus/.
"""

from web.app import app, create_app

__all__ = ["app", "create_app"]
