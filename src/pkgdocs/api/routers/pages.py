"""
Static pages: home page and license policy.

Endpoints:
    GET /                Home page
    GET /license-policy  Which licenses allow documentation to be shown
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from pkgdocs.api.deps import Nonce, Renderer
from pkgdocs.frontend.pages import BasePageData
from pkgdocs.frontend.renderer import PageRenderer

router = APIRouter()


def _static_page(renderer: PageRenderer, template: str, title: str, nonce: str) -> HTMLResponse:
    status, body = renderer.serve_page(template, BasePageData(title=title, nonce=nonce))
    return HTMLResponse(content=body, status_code=int(status))


@router.get("/", response_class=HTMLResponse)
def index(renderer: Renderer, nonce: Nonce) -> HTMLResponse:
    return _static_page(renderer, "index.html", "Package Docs", nonce)


@router.get("/license-policy", response_class=HTMLResponse)
def license_policy(renderer: Renderer, nonce: Nonce) -> HTMLResponse:
    return _static_page(renderer, "license_policy.html", "Licenses", nonce)
