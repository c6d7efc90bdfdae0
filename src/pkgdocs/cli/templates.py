"""
CLI: ``pkgdocs check-templates``: compile every template set and report.
"""

from __future__ import annotations

from http import HTTPStatus

import typer
from rich.table import Table

from pkgdocs.api.deps import get_settings
from pkgdocs.cli.utils import console, err_console
from pkgdocs.core.errors import TemplateError
from pkgdocs.frontend.renderer import PAGE_SETS, PageRenderer


def check_templates(
    template_dir: str | None = typer.Option(
        None, "--template-dir", "-t", help="Template directory [default: settings]"
    ),
) -> None:
    """Compile all page template sets and render the fallback error page."""
    directory = template_dir or get_settings().resolved_template_dir
    try:
        renderer = PageRenderer(directory)
    except TemplateError as e:
        err_console.print(f"[red]Template check failed:[/red] {e.message}")
        raise typer.Exit(code=1) from e

    table = Table(title=f"Template sets in {directory}")
    table.add_column("Page", style="cyan")
    table.add_column("Files")
    for page_set in PAGE_SETS:
        table.add_row(page_set[0], ", ".join(f"pages/{name}" for name in page_set))
    console.print(table)
    console.print(
        f"[green]OK[/green] {len(renderer.page_names())} sets compiled; "
        f"fallback {int(HTTPStatus.INTERNAL_SERVER_ERROR)} page is {len(renderer.fallback_page)} bytes"
    )
