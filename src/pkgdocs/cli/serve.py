"""
CLI: ``pkgdocs serve``: start the documentation server.
"""

from __future__ import annotations

import os

import typer
import uvicorn

from pkgdocs.api.deps import get_settings
from pkgdocs.cli.utils import console


def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address [default: settings]"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port [default: settings]"),
    reload: bool = typer.Option(False, "--reload", help="Restart the server when code changes"),
    reload_templates: bool = typer.Option(
        False, "--reload-templates", help="Recompile templates on every page (development)"
    ),
    fixture: str | None = typer.Option(None, "--fixture", "-f", help="YAML fixture for the memory store"),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Start the pkgdocs HTTP server."""
    # The app factory reads settings from the environment in the server process.
    if reload_templates:
        os.environ["PKGDOCS_RELOAD_TEMPLATES"] = "true"
    if fixture:
        os.environ["PKGDOCS_FIXTURE_PATH"] = fixture
    get_settings.cache_clear()
    settings = get_settings()

    host = host or settings.host
    port = port or settings.port
    console.print(f"[bold green]Starting pkgdocs[/bold green] on {host}:{port}")
    console.print(f"  data source: [cyan]{settings.data_source}[/cyan]")
    console.print(f"  templates:   [cyan]{settings.resolved_template_dir}[/cyan]")
    uvicorn.run(
        "pkgdocs.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )
