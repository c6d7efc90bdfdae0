"""
Details page handling: path + tab ─► resource view ─► payload ─► page.

The handler decides which resource kind a request path names, loads it
in the legacy or the version-aware shape (depending on the
``use_directories`` flag), resolves the user-supplied tab through the
registry and asks the dispatcher for the tab's content.

A tab name that comes from the URL is user input: unknown or disabled
names fall back to the overview tab. Only names the registry itself
knows reach the dispatcher.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Any

from pkgdocs.core.errors import InvalidArgumentError
from pkgdocs.core.feature_flags import USE_DIRECTORIES, FlagRegistry
from pkgdocs.core.logging import LogContext, get_logger
from pkgdocs.core.protocols import DataSource
from pkgdocs.domain.paths import split_versioned_path, url_is_versioned
from pkgdocs.frontend.details import DetailDispatcher
from pkgdocs.frontend.pages import DetailsPage, breadcrumbs
from pkgdocs.frontend.renderer import PageRenderer
from pkgdocs.frontend.tabs import ResourceKind, TabRegistry, TabSettings

logger = get_logger(__name__)


@dataclass
class DetailsRequest:
    """The parts of an HTTP request the details handler looks at."""

    full_path: str
    tab: str | None = None
    nonce: str = ""
    url_path: str = ""

    @property
    def versioned(self) -> bool:
        return url_is_versioned(self.full_path)


class DetailsHandler:
    def __init__(
        self,
        ds: DataSource,
        registry: TabRegistry,
        dispatcher: DetailDispatcher,
        renderer: PageRenderer,
        flags: FlagRegistry,
    ):
        self.ds = ds
        self.registry = registry
        self.dispatcher = dispatcher
        self.renderer = renderer
        self.flags = flags

    def _split(self, req: DetailsRequest) -> tuple[str, str]:
        path, version = split_versioned_path(req.full_path)
        if not path:
            raise InvalidArgumentError("empty path")
        return path, version

    def _page(
        self,
        req: DetailsRequest,
        kind: ResourceKind,
        *,
        name: str,
        path: str,
        module_path: str,
        version: str,
        is_redistributable: bool,
        fetch: Any,
    ) -> tuple[int, bytes]:
        settings: TabSettings = self.registry.resolve(kind, req.tab)
        can_show = is_redistributable or settings.always_show_details
        with LogContext(path=path, version=version, tab=settings.name, kind=kind.value):
            details = fetch(settings.name) if can_show else None
        page = DetailsPage(
            title=name,
            nonce=req.nonce,
            kind=kind.value,
            name=name,
            path=path,
            module_path=module_path,
            version=version,
            namespace=breadcrumbs(path, module_path, version if req.versioned else None),
            is_redistributable=is_redistributable,
            can_show_details=can_show,
            settings=settings,
            tabs=self.registry.tabs_for(kind),
            details=details,
            url_path=req.url_path,
        )
        return self.renderer.serve_page(settings.template_name, page)

    def package_page(self, req: DetailsRequest) -> tuple[int, bytes]:
        """Serve a package page, or a directory page when path holds no package."""
        path, version = self._split(req)
        info = self.ds.get_path_info(path, version)
        use_directories = self.flags.is_enabled(USE_DIRECTORIES)
        versioned = req.versioned

        if not info.is_package:
            return self._directory_page(req, info.path, info.module_path, info.version, use_directories)

        if use_directories:
            vdir = self.ds.get_directory(path, info.module_path, info.version)
            pkg = vdir.package
            return self._page(
                req,
                ResourceKind.PACKAGE,
                name=pkg.name if pkg else posixpath.basename(path),
                path=path,
                module_path=vdir.module_path,
                version=vdir.version,
                is_redistributable=vdir.is_redistributable,
                fetch=lambda tab: self.dispatcher.fetch_details_for_package(
                    tab, self.ds, vdir, versioned=versioned
                ),
            )

        legacy = self.ds.legacy_get_package(path, info.module_path, info.version)
        return self._page(
            req,
            ResourceKind.PACKAGE,
            name=legacy.package.name,
            path=path,
            module_path=legacy.module_path,
            version=legacy.version,
            is_redistributable=legacy.is_redistributable,
            fetch=lambda tab: self.dispatcher.legacy_fetch_details_for_package(
                tab, self.ds, legacy, versioned=versioned
            ),
        )

    def _directory_page(
        self,
        req: DetailsRequest,
        path: str,
        module_path: str,
        version: str,
        use_directories: bool,
    ) -> tuple[int, bytes]:
        versioned = req.versioned
        if use_directories:
            vdir = self.ds.get_directory(path, module_path, version)
            return self._page(
                req,
                ResourceKind.DIRECTORY,
                name=posixpath.basename(path),
                path=path,
                module_path=module_path,
                version=version,
                is_redistributable=vdir.is_redistributable,
                fetch=lambda tab: self.dispatcher.fetch_details_for_directory(
                    tab, self.ds, vdir, versioned=versioned
                ),
            )

        directory = self.ds.legacy_get_directory(path, module_path, version)
        licenses = self.ds.legacy_get_module_licenses(module_path, version)
        return self._page(
            req,
            ResourceKind.DIRECTORY,
            name=posixpath.basename(path),
            path=path,
            module_path=module_path,
            version=version,
            is_redistributable=directory.module_info.is_redistributable,
            fetch=lambda tab: self.dispatcher.legacy_fetch_details_for_directory(
                tab, self.ds, directory, licenses, versioned=versioned
            ),
        )

    def module_page(self, req: DetailsRequest) -> tuple[int, bytes]:
        path, version = self._split(req)
        mi = self.ds.legacy_get_module_info(path, version)
        licenses = self.ds.legacy_get_module_licenses(mi.module_path, mi.version)
        versioned = req.versioned
        return self._page(
            req,
            ResourceKind.MODULE,
            name=mi.module_path,
            path=mi.module_path,
            module_path=mi.module_path,
            version=mi.version,
            is_redistributable=mi.is_redistributable,
            fetch=lambda tab: self.dispatcher.fetch_details_for_module(
                tab, self.ds, mi, licenses, mi.readme, versioned=versioned
            ),
        )
