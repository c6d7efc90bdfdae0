"""
Detail dispatcher: maps (resource view, tab) to the fetcher that builds the tab.

A page is described by a :data:`ResourceView`: one of five small variants
covering the three resource kinds (package, module, directory) in either
the legacy or the version-aware shape. Each variant exposes the same
adapter properties (``path``, ``module_path``, ``version``,
``is_redistributable``) so callers can treat them uniformly.

:class:`DetailDispatcher` owns one handler table per variant. At
construction it checks that every enabled tab the registry lists for a
variant's kind has a handler, so registry/dispatcher drift fails at startup.
At request time an unmatched tab still raises :class:`UnknownTabError`;
it is never silently defaulted.

Architecture:
    ::

        router ──► DetailsHandler ──► DetailDispatcher.fetch_details(tab, ds, view)
                                            │
                          ┌─────────────────┼──────────────────┐
                          ▼                 ▼                  ▼
                    LegacyPackageView   PackageView    ModuleView / DirectoryView ...
                          │                 │                  │
                          └──────── fetchers (overview, versions, licenses, ...)

Tags:
    dispatch, tabs, frontend, migration, pkgdocs
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union, cast

from pkgdocs.core.errors import CapabilityNotSupportedError, NotFoundError, UnknownTabError
from pkgdocs.core.feature_flags import USE_DIRECTORIES, FlagRegistry
from pkgdocs.core.logging import LogContext, get_logger
from pkgdocs.core.protocols import Capability, DataSource, ImportedBySource, supports
from pkgdocs.domain.models import (
    Directory,
    DirectoryMeta,
    LegacyDirectory,
    LegacyVersionedPackage,
    License,
    ModuleInfo,
    Readme,
    VersionedDirectory,
)
from pkgdocs.frontend.fetchers import (
    LicensesDetails,
    construct_overview_details,
    fetch_directory_details,
    fetch_documentation_details,
    fetch_imported_by_details,
    fetch_imports_details,
    fetch_module_licenses_details,
    fetch_module_versions_details,
    fetch_package_overview_details,
    fetch_package_versions_details,
    legacy_create_directory,
    legacy_fetch_directory_details,
    legacy_fetch_documentation_details,
    legacy_fetch_package_licenses_details,
    legacy_fetch_package_overview_details,
    licenses_to_metadatas,
    transform_licenses,
)
from pkgdocs.frontend.tabs import ResourceKind, TabRegistry

logger = get_logger(__name__)

NOT_SUPPORTED_MESSAGE = "This page is not supported by this data source."


class ResourceShape(str, Enum):
    LEGACY = "legacy"
    VERSIONED = "versioned"


# ---------------------------------------------------------------------------
# Resource views
# ---------------------------------------------------------------------------


@dataclass
class LegacyPackageView:
    package: LegacyVersionedPackage

    kind: ClassVar[ResourceKind] = ResourceKind.PACKAGE
    shape: ClassVar[ResourceShape] = ResourceShape.LEGACY

    @property
    def path(self) -> str:
        return self.package.path

    @property
    def module_path(self) -> str:
        return self.package.module_path

    @property
    def version(self) -> str:
        return self.package.version

    @property
    def is_redistributable(self) -> bool:
        return self.package.is_redistributable


@dataclass
class PackageView:
    directory: VersionedDirectory

    kind: ClassVar[ResourceKind] = ResourceKind.PACKAGE
    shape: ClassVar[ResourceShape] = ResourceShape.VERSIONED

    @property
    def path(self) -> str:
        return self.directory.path

    @property
    def module_path(self) -> str:
        return self.directory.module_path

    @property
    def version(self) -> str:
        return self.directory.version

    @property
    def is_redistributable(self) -> bool:
        return self.directory.is_redistributable


@dataclass
class ModuleView:
    module_info: ModuleInfo
    licenses: list[License] = field(default_factory=list)
    readme: Readme | None = None

    kind: ClassVar[ResourceKind] = ResourceKind.MODULE
    shape: ClassVar[ResourceShape] = ResourceShape.VERSIONED

    @property
    def path(self) -> str:
        return self.module_info.module_path

    @property
    def module_path(self) -> str:
        return self.module_info.module_path

    @property
    def version(self) -> str:
        return self.module_info.version

    @property
    def is_redistributable(self) -> bool:
        return self.module_info.is_redistributable


@dataclass
class DirectoryView:
    directory: VersionedDirectory

    kind: ClassVar[ResourceKind] = ResourceKind.DIRECTORY
    shape: ClassVar[ResourceShape] = ResourceShape.VERSIONED

    @property
    def path(self) -> str:
        return self.directory.path

    @property
    def module_path(self) -> str:
        return self.directory.module_path

    @property
    def version(self) -> str:
        return self.directory.version

    @property
    def is_redistributable(self) -> bool:
        return self.directory.is_redistributable


@dataclass
class LegacyDirectoryView:
    directory: LegacyDirectory
    licenses: list[License] = field(default_factory=list)

    kind: ClassVar[ResourceKind] = ResourceKind.DIRECTORY
    shape: ClassVar[ResourceShape] = ResourceShape.LEGACY

    @property
    def path(self) -> str:
        return self.directory.path

    @property
    def module_path(self) -> str:
        return self.directory.module_path

    @property
    def version(self) -> str:
        return self.directory.version

    @property
    def is_redistributable(self) -> bool:
        return self.directory.module_info.is_redistributable


ResourceView = Union[LegacyPackageView, PackageView, ModuleView, DirectoryView, LegacyDirectoryView]

Handler = Callable[[DataSource, Any, bool], Any]


def _require_imported_by(ds: DataSource) -> ImportedBySource:
    if not supports(ds, Capability.IMPORTED_BY):
        raise CapabilityNotSupportedError(Capability.IMPORTED_BY.value, NOT_SUPPORTED_MESSAGE)
    return cast(ImportedBySource, ds)


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class DetailDispatcher:
    """Fetch the content of one tab for one resource view.

    Example:
        dispatcher = DetailDispatcher(TabRegistry.build(), build_flag_registry())
        details = dispatcher.fetch_details("versions", ds, ModuleView(mi))
    """

    def __init__(self, registry: TabRegistry, flags: FlagRegistry):
        self._registry = registry
        self._flags = flags
        self._handlers: dict[type, dict[str, Handler]] = {
            LegacyPackageView: {
                "doc": self._legacy_package_doc,
                "versions": self._legacy_package_versions,
                "subdirectories": self._legacy_package_subdirectories,
                "imports": self._package_imports,
                "importedby": self._package_imported_by,
                "licenses": self._package_licenses,
                "overview": self._legacy_package_overview,
            },
            PackageView: {
                "doc": self._package_doc,
                "overview": self._package_overview,
                "subdirectories": self._package_subdirectories,
                "versions": self._package_versions,
                "imports": self._package_imports,
                "importedby": self._package_imported_by,
                "licenses": self._package_licenses,
            },
            ModuleView: {
                "packages": self._module_packages,
                "licenses": self._module_licenses,
                "versions": self._module_versions,
                "overview": self._module_overview,
            },
            DirectoryView: {
                "overview": self._directory_overview,
                "subdirectories": self._directory_subdirectories,
                "licenses": self._directory_licenses,
            },
            LegacyDirectoryView: {
                "overview": self._legacy_directory_overview,
                "subdirectories": self._legacy_directory_subdirectories,
                "licenses": self._legacy_directory_licenses,
            },
        }
        self._check_coverage()

    def _check_coverage(self) -> None:
        for view_type, handlers in self._handlers.items():
            for ts in self._registry.tabs_for(view_type.kind):
                if not ts.disabled and ts.name not in handlers:
                    raise UnknownTabError(ts.name, view_type.kind.value)

    def fetch_details(self, tab: str, ds: DataSource, view: ResourceView, *, versioned: bool = False) -> Any:
        """Return the payload for tab, or raise :class:`UnknownTabError`.

        versioned is true when the request path named an explicit version.
        """
        handler = self._handlers.get(type(view), {}).get(tab)
        if handler is None or self._registry.get(view.kind, tab) is None:
            raise UnknownTabError(tab, view.kind.value)
        with LogContext(tab=tab, kind=view.kind.value, shape=view.shape.value):
            logger.debug("fetch_details", path=view.path, version=view.version)
            return handler(ds, view, versioned)

    # ------------------------------------------------------------------ #
    # Entry points per resource kind
    # ------------------------------------------------------------------ #

    def legacy_fetch_details_for_package(
        self, tab: str, ds: DataSource, pkg: LegacyVersionedPackage, *, versioned: bool = False
    ) -> Any:
        return self.fetch_details(tab, ds, LegacyPackageView(pkg), versioned=versioned)

    def fetch_details_for_package(
        self, tab: str, ds: DataSource, vdir: VersionedDirectory, *, versioned: bool = False
    ) -> Any:
        return self.fetch_details(tab, ds, PackageView(vdir), versioned=versioned)

    def fetch_details_for_module(
        self,
        tab: str,
        ds: DataSource,
        mi: ModuleInfo,
        licenses: list[License],
        readme: Readme | None,
        *,
        versioned: bool = False,
    ) -> Any:
        return self.fetch_details(tab, ds, ModuleView(mi, licenses, readme), versioned=versioned)

    def fetch_details_for_directory(
        self, tab: str, ds: DataSource, vdir: VersionedDirectory, *, versioned: bool = False
    ) -> Any:
        return self.fetch_details(tab, ds, DirectoryView(vdir), versioned=versioned)

    def legacy_fetch_details_for_directory(
        self,
        tab: str,
        ds: DataSource,
        dir: LegacyDirectory,
        licenses: list[License],
        *,
        versioned: bool = False,
    ) -> Any:
        return self.fetch_details(tab, ds, LegacyDirectoryView(dir, licenses), versioned=versioned)

    # ------------------------------------------------------------------ #
    # Packages
    # ------------------------------------------------------------------ #

    def _legacy_package_doc(self, ds: DataSource, view: LegacyPackageView, versioned: bool):
        return legacy_fetch_documentation_details(view.package)

    def _package_doc(self, ds: DataSource, view: PackageView, versioned: bool):
        pkg = view.directory.package
        if pkg is None:
            raise NotFoundError(f"no package at {view.path}").with_context(
                path=view.path, version=view.version
            )
        return fetch_documentation_details(pkg.documentation)

    def _legacy_package_overview(self, ds: DataSource, view: LegacyPackageView, versioned: bool):
        return legacy_fetch_package_overview_details(view.package, versioned)

    def _package_overview(self, ds: DataSource, view: PackageView, versioned: bool):
        return fetch_package_overview_details(view.directory, versioned)

    def _legacy_package_subdirectories(self, ds: DataSource, view: LegacyPackageView, versioned: bool):
        pkg = view.package
        return legacy_fetch_directory_details(ds, pkg.path, pkg.module_info, pkg.licenses, False)

    def _package_subdirectories(self, ds: DataSource, view: PackageView, versioned: bool):
        return fetch_directory_details(ds, view.directory, False)

    def _legacy_package_versions(self, ds: DataSource, view: LegacyPackageView, versioned: bool):
        pkg = view.package
        return fetch_package_versions_details(ds, pkg.path, pkg.v1_path, pkg.module_path)

    def _package_versions(self, ds: DataSource, view: PackageView, versioned: bool):
        vdir = view.directory
        return fetch_package_versions_details(ds, vdir.path, vdir.v1_path, vdir.module_path)

    def _package_imports(self, ds: DataSource, view: LegacyPackageView | PackageView, versioned: bool):
        return fetch_imports_details(ds, view.path, view.module_path, view.version)

    def _package_imported_by(self, ds: DataSource, view: LegacyPackageView | PackageView, versioned: bool):
        # Checked before the call: restricted sources have no reverse-import index.
        source = _require_imported_by(ds)
        return fetch_imported_by_details(source, view.path, view.module_path)

    def _package_licenses(self, ds: DataSource, view: LegacyPackageView | PackageView, versioned: bool):
        return legacy_fetch_package_licenses_details(ds, view.path, view.module_path, view.version)

    # ------------------------------------------------------------------ #
    # Modules
    # ------------------------------------------------------------------ #

    def _module_packages(self, ds: DataSource, view: ModuleView, versioned: bool):
        mi = view.module_info
        if self._flags.is_enabled(USE_DIRECTORIES):
            vdir = VersionedDirectory(
                module_info=mi,
                directory=Directory(
                    meta=DirectoryMeta(
                        path=mi.module_path,
                        v1_path=mi.series_path(),
                        is_redistributable=mi.is_redistributable,
                        licenses=licenses_to_metadatas(view.licenses),
                    ),
                    readme=view.readme,
                ),
            )
            return fetch_directory_details(ds, vdir, True)
        return legacy_fetch_directory_details(
            ds, mi.module_path, mi, licenses_to_metadatas(view.licenses), True
        )

    def _module_licenses(self, ds: DataSource, view: ModuleView, versioned: bool):
        mi = view.module_info
        return LicensesDetails(licenses=transform_licenses(mi.module_path, mi.version, view.licenses))

    def _module_versions(self, ds: DataSource, view: ModuleView, versioned: bool):
        return fetch_module_versions_details(ds, view.module_info)

    def _module_overview(self, ds: DataSource, view: ModuleView, versioned: bool):
        mi = view.module_info
        return construct_overview_details(mi, view.readme, mi.is_redistributable, versioned)

    # ------------------------------------------------------------------ #
    # Directories
    # ------------------------------------------------------------------ #

    def _directory_overview(self, ds: DataSource, view: DirectoryView, versioned: bool):
        vdir = view.directory
        return construct_overview_details(vdir.module_info, vdir.readme, vdir.is_redistributable, versioned)

    def _directory_subdirectories(self, ds: DataSource, view: DirectoryView, versioned: bool):
        return fetch_directory_details(ds, view.directory, False)

    def _directory_licenses(self, ds: DataSource, view: DirectoryView, versioned: bool):
        return fetch_module_licenses_details(ds, view.module_path, view.version)

    def _legacy_directory_overview(self, ds: DataSource, view: LegacyDirectoryView, versioned: bool):
        mi = view.directory.module_info
        return construct_overview_details(mi, mi.readme, mi.is_redistributable, versioned)

    def _legacy_directory_subdirectories(self, ds: DataSource, view: LegacyDirectoryView, versioned: bool):
        # The directory is already loaded; no second lookup.
        return legacy_create_directory(view.directory, licenses_to_metadatas(view.licenses), False)

    def _legacy_directory_licenses(self, ds: DataSource, view: LegacyDirectoryView, versioned: bool):
        d = view.directory
        return LicensesDetails(licenses=transform_licenses(d.module_path, d.version, view.licenses))
