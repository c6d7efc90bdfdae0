"""
FastAPI dependency injection: shared singletons and per-request values.

The app factory builds the data source, tab registry, dispatcher and
renderer once and stores them on ``app.state``; routers receive them
through the aliases below instead of reaching for globals.

Usage in routers::

    from pkgdocs.api.deps import Handler, Nonce

    @router.get("/mod/{full_path:path}")
    def module_page(full_path: str, handler: Handler, nonce: Nonce):
        ...
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from pkgdocs.api.settings import PkgDocsSettings
from pkgdocs.frontend.handlers import DetailsHandler
from pkgdocs.frontend.renderer import PageRenderer

# ── Settings (singleton) ─────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> PkgDocsSettings:
    """Cached settings: loaded once per process."""
    return PkgDocsSettings()


# ── Application singletons ───────────────────────────────────────────────


def get_renderer(request: Request) -> PageRenderer:
    return request.app.state.renderer


def get_details_handler(request: Request) -> DetailsHandler:
    return request.app.state.details_handler


# ── Per-request values ───────────────────────────────────────────────────


def get_nonce(request: Request) -> str:
    """CSP nonce set by :class:`~pkgdocs.api.middleware.nonce.NonceMiddleware`."""
    return getattr(request.state, "nonce", "")


# ── Convenience type aliases ─────────────────────────────────────────────

Renderer = Annotated[PageRenderer, Depends(get_renderer)]
Handler = Annotated[DetailsHandler, Depends(get_details_handler)]
Nonce = Annotated[str, Depends(get_nonce)]
