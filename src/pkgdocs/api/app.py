"""
FastAPI application factory.

``create_app()`` is the single composition root: it builds the data
source, the tab registry, the detail dispatcher and the page renderer
once, stores them on ``app.state``, and wires middleware, exception
handlers, static files and routers.

Tags:
    pkgdocs, api, app-factory, composition-root, FastAPI
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

import pkgdocs
from pkgdocs.api.deps import get_settings
from pkgdocs.api.middleware.errors import (
    http_exception_handler,
    pkgdocs_error_handler,
    unhandled_exception_handler,
)
from pkgdocs.api.middleware.nonce import NonceMiddleware
from pkgdocs.api.middleware.request_id import RequestIDMiddleware
from pkgdocs.api.settings import PkgDocsSettings
from pkgdocs.core.errors import PkgDocsError
from pkgdocs.core.feature_flags import USE_DIRECTORIES, FlagRegistry, build_flag_registry
from pkgdocs.core.logging import configure_logging, get_logger
from pkgdocs.core.protocols import DataSource
from pkgdocs.datasource import create_data_source
from pkgdocs.frontend.details import DetailDispatcher
from pkgdocs.frontend.handlers import DetailsHandler
from pkgdocs.frontend.renderer import PageRenderer
from pkgdocs.frontend.tabs import TabRegistry


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup / shutdown logging."""
    log = get_logger("pkgdocs.api")
    settings: PkgDocsSettings = app.state.settings
    log.info(
        "pkgdocs_starting",
        version=app.version,
        data_source=type(app.state.data_source).__name__,
        capabilities=sorted(c.value for c in app.state.data_source.capabilities),
        use_directories=app.state.flags.is_enabled(USE_DIRECTORIES),
        reload_templates=settings.reload_templates,
    )
    yield
    log.info("pkgdocs_shutting_down")


def create_app(
    settings: PkgDocsSettings | None = None,
    *,
    data_source: DataSource | None = None,
    flags: FlagRegistry | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : PkgDocsSettings | None
        Override settings (useful for testing). When ``None`` the cached
        singleton from :func:`get_settings` is used.
    data_source : DataSource | None
        Use this data source instead of building one from settings.
    flags : FlagRegistry | None
        Use this flag registry instead of building one from settings.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)

    flags = flags or build_flag_registry(use_directories=settings.use_directories)
    if data_source is None:
        data_source = create_data_source(
            settings.data_source,
            fixture_path=settings.fixture_path,
            mirror_dir=settings.mirror_dir,
            cache_size=settings.cache_size,
            cache_ttl_seconds=settings.cache_ttl_seconds,
        )
    registry = TabRegistry.build()
    dispatcher = DetailDispatcher(registry, flags)
    renderer = PageRenderer(settings.resolved_template_dir, reload_templates=settings.reload_templates)

    app = FastAPI(
        title="pkgdocs",
        version=pkgdocs.__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings
    app.state.flags = flags
    app.state.data_source = data_source
    app.state.registry = registry
    app.state.renderer = renderer
    app.state.details_handler = DetailsHandler(data_source, registry, dispatcher, renderer, flags)

    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (last added runs first) ────────────────────────────
    app.add_middleware(NonceMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(PkgDocsError, pkgdocs_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routes (catch-all last) ──────────────────────────────────────
    from pkgdocs.api.routers import details, pages

    app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")
    app.include_router(pages.router, tags=["pages"])
    app.include_router(details.router, tags=["details"])
    app.include_router(details.catch_all_router, tags=["details"])

    return app
