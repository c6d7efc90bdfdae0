"""
Root Typer application for the pkgdocs CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

import pkgdocs
from pkgdocs.cli.serve import serve
from pkgdocs.cli.templates import check_templates

app = Typer(
    name="pkgdocs",
    help="pkgdocs: documentation pages for Go-style packages and modules.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pkgdocs {pkgdocs.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """pkgdocs CLI: serve documentation pages and check templates."""


app.command("serve")(serve)
app.command("check-templates")(check_templates)
