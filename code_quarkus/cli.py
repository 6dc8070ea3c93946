"""Thin CLI wrapper for code_quarkus.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from code_quarkus import __version__
from code_quarkus.config import configure_logging, get_settings, print_settings_json
from code_quarkus.errors import CodeQuarkusError, InvalidInputError
from code_quarkus.extensions.catalog import load_catalog
from code_quarkus.projects.generator import MavenPluginGenerator
from code_quarkus.projects.service import ProjectService

app = typer.Typer(
    name="code-quarkus",
    help="Code Quarkus - generate Quarkus starter projects",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"code-quarkus version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Code Quarkus - generate Quarkus starter projects."""
    configure_logging(
        get_settings(),
        handler=RichHandler(console=err_console, show_path=False),
    )


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        typer.echo(print_settings_json(settings))
        return

    tmp_dir_display = str(settings.tmp_dir) if settings.tmp_dir else "(system default)"
    catalog_display = (
        str(settings.catalog_path) if settings.catalog_path else "(bundled)"
    )
    console.print("[bold]Effective Configuration:[/bold]")
    console.print()
    console.print("[bold]Public:[/bold]")
    console.print(f"  Environment:         {settings.environment}")
    console.print(f"  Git commit id:       {settings.git_commit_id}")
    console.print(f"  Features:            {', '.join(settings.features) or '(none)'}")
    console.print()
    console.print("[bold]Generator:[/bold]")
    console.print(f"  Quarkus version:     {settings.quarkus_version}")
    console.print(f"  Platform group id:   {settings.platform_group_id}")
    console.print(f"  Maven executable:    {settings.maven_executable}")
    console.print(f"  Java version:        {settings.java_version}")
    console.print(f"  Timeout (seconds):   {settings.generation_timeout}")
    console.print()
    console.print("[bold]Paths:[/bold]")
    console.print(f"  Temp directory:      {tmp_dir_display}")
    console.print(f"  Extension catalog:   {catalog_display}")
    console.print()
    console.print("[bold]Packaging:[/bold]")
    console.print(f"  Archive timestamp:   {settings.archive_timestamp.isoformat()}")
    console.print(f"  Log level:           {settings.log_level}")


extensions_app = typer.Typer(help="Browse the extension catalog")
app.add_typer(extensions_app, name="extensions")


@extensions_app.command("list")
def extensions_list(
    category: Annotated[
        str | None,
        typer.Option("--category", "-c", help="Filter by category"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List extensions of the catalog."""
    settings = get_settings()
    try:
        catalog = load_catalog(settings.catalog_path)
    except CodeQuarkusError as e:
        err_console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(code=1) from None

    entries = [
        ext
        for ext in catalog.to_public_list()
        if category is None or ext["category"].lower() == category.lower()
    ]

    if json_output:
        typer.echo(json.dumps(entries, indent=2))
        return

    if not entries:
        console.print("[yellow]No extensions found[/yellow]")
        return

    table = Table(title=f"{len(entries)} extension(s)")
    table.add_column("Short id", style="green")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Category")
    for ext in entries:
        table.add_row(ext["shortId"], ext["id"], ext["name"], ext["category"])
    console.print(table)


@extensions_app.command("show")
def extensions_show(
    key: Annotated[
        str,
        typer.Argument(help="Extension id, artifactId or short id"),
    ],
) -> None:
    """Show details of an extension."""
    settings = get_settings()
    try:
        catalog = load_catalog(settings.catalog_path)
    except CodeQuarkusError as e:
        err_console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(code=1) from None

    ext = catalog.find(key)
    if ext is None:
        err_console.print(f"[red]Extension not found: {escape(key)}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[bold green]{ext.name}[/bold green]")
    console.print(f"  Id:          {ext.id}")
    console.print(f"  Short id:    {ext.short_id}")
    console.print(f"  Category:    {ext.category}")
    if ext.description:
        console.print(f"  Description: {ext.description}")
    if ext.tags:
        console.print(f"  Tags:        {', '.join(ext.tags)}")
    if ext.guide:
        console.print(f"  Guide:       {ext.guide}")


@app.command()
def generate(
    group_id: Annotated[
        str | None, typer.Option("--group-id", "-g", help="Project groupId")
    ] = None,
    artifact_id: Annotated[
        str | None, typer.Option("--artifact-id", "-a", help="Project artifactId")
    ] = None,
    version: Annotated[
        str | None, typer.Option("--project-version", "-v", help="Project version")
    ] = None,
    class_name: Annotated[
        str | None, typer.Option("--class-name", "-c", help="Example class name")
    ] = None,
    path: Annotated[
        str | None, typer.Option("--path", "-p", help="Example resource path")
    ] = None,
    build_tool: Annotated[
        str | None,
        typer.Option("--build-tool", "-b", help="MAVEN, GRADLE or GRADLE_KOTLIN_DSL"),
    ] = None,
    extensions: Annotated[
        list[str] | None,
        typer.Option("--extension", "-e", help="Extension id (can be repeated)"),
    ] = None,
    short_extensions: Annotated[
        str | None,
        typer.Option("--short-ids", "-s", help="Dot separated extension short ids"),
    ] = None,
    no_examples: Annotated[
        bool, typer.Option("--no-examples", help="Skip example code")
    ] = False,
    with_ci: Annotated[
        bool, typer.Option("--ci", help="Include a GitHub Actions workflow")
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Archive path (default: <artifactId>.zip)"),
    ] = None,
) -> None:
    """Generate a project archive on disk."""
    settings = get_settings()
    try:
        catalog = load_catalog(settings.catalog_path)
        service = ProjectService(catalog, MavenPluginGenerator(settings), settings)
        definition = service.parse_definition(
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            class_name=class_name,
            path=path,
            build_tool=build_tool,
            extensions=extensions,
            short_extensions=short_extensions,
            no_examples=no_examples,
        )
        content = service.create(definition, with_ci=with_ci)
    except InvalidInputError as e:
        err_console.print(
            f"[red]Invalid input ({e.field}): {escape(e.message)}[/red]"
        )
        raise typer.Exit(code=1) from None
    except CodeQuarkusError as e:
        err_console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(code=1) from None

    target = output or Path(f"{definition.artifact_id}.zip")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    except OSError as e:
        err_console.print(f"[red]Failed to write {escape(f'{target}: {e}')}[/red]")
        raise typer.Exit(code=1) from None
    console.print(f"[green]Wrote {target} ({len(content)} bytes)[/green]")


@app.command()
def serve(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Bind port")] = 8080,
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("web.app:app", host=host, port=port)


if __name__ == "__main__":
    app()
