"""Entry point for python -m code_quarkus."""

from code_quarkus.cli import app

app(prog_name="code-quarkus")
