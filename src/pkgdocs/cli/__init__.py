"""Command-line interface (``pkgdocs``)."""

from pkgdocs.cli.app import app

__all__ = ["app"]
