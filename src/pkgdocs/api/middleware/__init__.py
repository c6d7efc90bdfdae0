"""HTTP middleware and exception handlers."""

from pkgdocs.api.middleware.errors import (
    ERROR_CATEGORY_TO_STATUS,
    http_exception_handler,
    pkgdocs_error_handler,
    status_for_category,
    unhandled_exception_handler,
)
from pkgdocs.api.middleware.nonce import NonceMiddleware
from pkgdocs.api.middleware.request_id import RequestIDMiddleware

__all__ = [
    "ERROR_CATEGORY_TO_STATUS",
    "NonceMiddleware",
    "RequestIDMiddleware",
    "http_exception_handler",
    "pkgdocs_error_handler",
    "status_for_category",
    "unhandled_exception_handler",
]
