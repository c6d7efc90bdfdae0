"""
pkgdocs: documentation pages for Go-style packages and modules.

Resolves a request path (with an optional ``@version``) and a tab name to
content fetched from a pluggable data source, and renders it through
Jinja2 templates.
"""

__version__ = "0.1.0"
