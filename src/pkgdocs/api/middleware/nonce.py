"""CSP nonce middleware: a fresh script nonce for every request.

Templates read the nonce from the page data and put it on inline
``<script>`` tags; the same value is sent in the
``Content-Security-Policy`` header so no other inline script runs.
"""

from __future__ import annotations

import secrets

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

NONCE_BYTES = 20


def content_security_policy(nonce: str) -> str:
    return "; ".join([
        "default-src 'self'",
        f"script-src 'nonce-{nonce}' 'strict-dynamic'",
        "style-src 'self'",
        "img-src 'self' data:",
        "object-src 'none'",
        "base-uri 'none'",
    ])


class NonceMiddleware(BaseHTTPMiddleware):
    """Generate a nonce, expose it as ``request.state.nonce`` and set the CSP header."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        nonce = secrets.token_urlsafe(NONCE_BYTES)
        request.state.nonce = nonce
        response = await call_next(request)
        response.headers["Content-Security-Policy"] = content_security_policy(nonce)
        return response
