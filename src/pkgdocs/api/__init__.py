"""
HTTP surface of pkgdocs.

Usage::

    uvicorn pkgdocs.api:create_app --factory
"""

from pkgdocs.api.app import create_app

__all__ = ["create_app"]
