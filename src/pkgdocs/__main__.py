from pkgdocs.cli import app

app()
