"""
Details router: package, directory and module pages.

Endpoints:
    GET /mod/<path>[@<version>][?tab=<name>]   Module page
    GET /pkg/<path>[@<version>][?tab=<name>]   Package (or directory) page
    GET /<path>[@<version>][?tab=<name>]       Same as /pkg/

The catch-all route must be registered after every other router.
Handlers are plain ``def`` so FastAPI runs them in the thread pool; data
source calls and template rendering block.
"""

from __future__ import annotations

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse

from pkgdocs.api.deps import Handler, Nonce
from pkgdocs.frontend.handlers import DetailsRequest

router = APIRouter()
catch_all_router = APIRouter()

TabQuery = Query(None, description="Tab to show; unknown names show the overview")


def _respond(result: tuple[int, bytes]) -> HTMLResponse:
    status, body = result
    return HTMLResponse(content=body, status_code=int(status))


def _details_request(request: Request, full_path: str, tab: str | None, nonce: str) -> DetailsRequest:
    return DetailsRequest(full_path=full_path, tab=tab, nonce=nonce, url_path=request.url.path)


@router.get("/mod/{full_path:path}", response_class=HTMLResponse)
def module_details(
    request: Request,
    full_path: str,
    handler: Handler,
    nonce: Nonce,
    tab: str | None = TabQuery,
) -> HTMLResponse:
    return _respond(handler.module_page(_details_request(request, full_path, tab, nonce)))


@router.get("/pkg/{full_path:path}", response_class=HTMLResponse)
def package_details(
    request: Request,
    full_path: str,
    handler: Handler,
    nonce: Nonce,
    tab: str | None = TabQuery,
) -> HTMLResponse:
    return _respond(handler.package_page(_details_request(request, full_path, tab, nonce)))


@catch_all_router.get("/{full_path:path}", response_class=HTMLResponse)
def path_details(
    request: Request,
    full_path: str,
    handler: Handler,
    nonce: Nonce,
    tab: str | None = TabQuery,
) -> HTMLResponse:
    return _respond(handler.package_page(_details_request(request, full_path, tab, nonce)))
