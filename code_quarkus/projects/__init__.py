"""Project creation module.

This module handles:
- Project definition validation
- Project generator invocation
- Reproducible zip packaging
- The project service tying them together
"""

from code_quarkus.projects.definition import (
    ProjectDefinition,
    parse_project_definition,
)

__all__ = ["ProjectDefinition", "parse_project_definition"]

# Import submodules directly (code_quarkus.projects.service, etc.)
# to keep this package free of import cycles
