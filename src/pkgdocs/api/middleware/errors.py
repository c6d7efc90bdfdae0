"""
Error handling: maps pkgdocs errors to status-coded HTML error pages.

Every failure while dispatching or rendering a page ends here. The error
category picks the status code; the renderer builds the error page, and
if that fails too, the fallback page captured at startup is served.
"""

from __future__ import annotations

from http import HTTPStatus

from fastapi import Request
from fastapi.responses import HTMLResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pkgdocs.core.errors import ErrorCategory, PkgDocsError
from pkgdocs.core.logging import get_logger
from pkgdocs.frontend.pages import ErrorPage
from pkgdocs.frontend.renderer import PageRenderer, status_info

logger = get_logger(__name__)

# ── Error category → HTTP status mapping ─────────────────────────────────

ERROR_CATEGORY_TO_STATUS: dict[ErrorCategory, int] = {
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.INVALID_INPUT: 400,
    ErrorCategory.UNSUPPORTED: 424,
    ErrorCategory.DATA_SOURCE: 500,
    ErrorCategory.TEMPLATE: 500,
    ErrorCategory.INTERNAL: 500,
}


def status_for_category(category: ErrorCategory) -> int:
    """Resolve an error category to an HTTP status, defaulting to 500."""
    return ERROR_CATEGORY_TO_STATUS.get(category, 500)


def error_page_response(
    request: Request,
    status: int,
    page: ErrorPage | None = None,
) -> HTMLResponse:
    """Render the error page for status, or the fallback page if that fails."""
    renderer: PageRenderer = request.app.state.renderer
    if page is not None:
        page.nonce = getattr(request.state, "nonce", "")
    code, body = renderer.serve_error_page(status, page)
    return HTMLResponse(content=body, status_code=int(code))


def _error_page_for(status: int, exc: PkgDocsError, debug: bool) -> ErrorPage | None:
    if exc.category in (ErrorCategory.UNSUPPORTED, ErrorCategory.INVALID_INPUT):
        return ErrorPage(message=status_info(status), secondary_message=exc.message)
    if exc.category == ErrorCategory.NOT_FOUND:
        return ErrorPage(
            message=status_info(status),
            secondary_message="The requested path or version could not be found.",
        )
    if debug:
        return ErrorPage(message=status_info(status), secondary_message=exc.message)
    return None


async def pkgdocs_error_handler(request: Request, exc: PkgDocsError) -> HTMLResponse:
    """Map a :class:`PkgDocsError` to its status and render the error page."""
    status = status_for_category(exc.category)
    if status >= 500:
        logger.error("request_failed", status=status, url=str(request.url), **exc.to_dict())
    else:
        logger.info("request_rejected", status=status, url=str(request.url), **exc.to_dict())
    debug = request.app.state.settings.debug
    return error_page_response(request, status, _error_page_for(status, exc, debug))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> HTMLResponse:
    """Routing-level errors (unknown static file, wrong method) as HTML pages."""
    return error_page_response(request, exc.status_code, ErrorPage(message=status_info(exc.status_code)))


async def unhandled_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
    """Catch-all for unhandled exceptions: returns the 500 error page."""
    logger.exception("unhandled_exception", url=str(request.url), error=str(exc))
    page = None
    if request.app.state.settings.debug:
        page = ErrorPage(message=status_info(HTTPStatus.INTERNAL_SERVER_ERROR), secondary_message=str(exc))
    return error_page_response(request, HTTPStatus.INTERNAL_SERVER_ERROR, page)
