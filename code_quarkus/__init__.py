"""code-quarkus - Starter project generator backend for Quarkus.

This package validates project definitions, expands extension short ids
through the extension catalog, drives an external project generator and
packages the result as a reproducible zip archive.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
