"""
Documentation frontend: tab registry, detail dispatch and page rendering.

Modules:
    tabs     : immutable per-kind tab catalogs
    details  : DetailDispatcher over the ResourceView union
    fetchers : per-tab content builders
    renderer : Jinja2 template sets behind a reader/writer lock
    handlers : request path + tab to rendered page
"""

from pkgdocs.frontend.details import (
    DetailDispatcher,
    DirectoryView,
    LegacyDirectoryView,
    LegacyPackageView,
    ModuleView,
    PackageView,
    ResourceShape,
    ResourceView,
)
from pkgdocs.frontend.handlers import DetailsHandler, DetailsRequest
from pkgdocs.frontend.pages import BasePageData, DetailsPage, ErrorPage
from pkgdocs.frontend.renderer import PAGE_SETS, PageRenderer, parse_page_templates
from pkgdocs.frontend.tabs import (
    DEFAULT_TAB,
    ResourceKind,
    TabRegistry,
    TabSettings,
    default_registry,
)

__all__ = [
    "BasePageData",
    "DEFAULT_TAB",
    "DetailDispatcher",
    "DetailsHandler",
    "DetailsPage",
    "DetailsRequest",
    "DirectoryView",
    "ErrorPage",
    "LegacyDirectoryView",
    "LegacyPackageView",
    "ModuleView",
    "PAGE_SETS",
    "PackageView",
    "PageRenderer",
    "ResourceKind",
    "ResourceShape",
    "ResourceView",
    "TabRegistry",
    "TabSettings",
    "default_registry",
    "parse_page_templates",
]
