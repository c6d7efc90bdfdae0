"""
Data source protocols for pkgdocs.

The frontend never talks to a concrete store. It depends on the
:class:`DataSource` shape below, and asks the data source which optional
features it offers through its ``capabilities`` set rather than by testing
its concrete type.

Manifesto:
    - **Decoupling:** Dispatch depends on shape, not implementation
    - **Explicit capabilities:** A data source declares up front what it can
      answer; dispatch checks the declaration *before* calling
    - **Testability:** Any object matching the protocol works

Architecture:
    ::

        protocols.py
        ├── Capability         : optional features a source may advertise
        ├── DataSource         : lookups every source must answer
        └── ImportedBySource   : reverse-import lookups (Capability.IMPORTED_BY)

    Implementations:
        MemoryStore           : full store, advertises IMPORTED_BY
        ReadThroughDataSource : restricted read-through source, advertises nothing

Tags:
    protocol, data-source, capability, pkgdocs
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from pkgdocs.domain.models import (
    LegacyDirectory,
    LegacyModuleInfo,
    LegacyVersionedPackage,
    License,
    ModuleInfo,
    PackageMeta,
    PathInfo,
    VersionedDirectory,
)


class Capability(str, Enum):
    """Optional data source features."""

    # Reverse import graph across every module in the store.
    IMPORTED_BY = "imported_by"


@runtime_checkable
class DataSource(Protocol):
    """
    Lookups the frontend needs to build any details page.

    Every method raises :class:`~pkgdocs.core.errors.NotFoundError` when the
    path/version is unknown and :class:`~pkgdocs.core.errors.DataSourceError`
    for any other failure. ``version`` may be ``"latest"``.
    Implementations must tolerate concurrent calls.
    """

    capabilities: frozenset[Capability]

    def get_path_info(self, path: str, version: str) -> PathInfo:
        """Resolve which module version contains path, and whether it is a package."""
        ...

    def get_module_info(self, module_path: str, version: str) -> ModuleInfo:
        ...

    def get_directory(self, path: str, module_path: str, version: str) -> VersionedDirectory:
        """Version-aware lookup of the directory (and package, if any) at path."""
        ...

    def get_packages_in_directory(self, path: str, module_path: str, version: str) -> list[PackageMeta]:
        """Every package at or below path within one module version."""
        ...

    def get_imports(self, path: str, module_path: str, version: str) -> list[str]:
        ...

    def get_tagged_versions_for_module(self, module_path: str) -> list[ModuleInfo]:
        """Tagged versions of every module in module_path's series."""
        ...

    def get_pseudo_versions_for_module(self, module_path: str) -> list[ModuleInfo]:
        ...

    def get_tagged_versions_for_package_series(self, path: str) -> list[ModuleInfo]:
        """Tagged versions of every module containing a package with path's v1 path."""
        ...

    def get_pseudo_versions_for_package_series(self, path: str) -> list[ModuleInfo]:
        ...

    def legacy_get_module_info(self, module_path: str, version: str) -> LegacyModuleInfo:
        ...

    def legacy_get_package(self, path: str, module_path: str, version: str) -> LegacyVersionedPackage:
        ...

    def legacy_get_directory(self, path: str, module_path: str, version: str) -> LegacyDirectory:
        ...

    def legacy_get_module_licenses(self, module_path: str, version: str) -> list[License]:
        ...

    def legacy_get_package_licenses(self, path: str, module_path: str, version: str) -> list[License]:
        ...


@runtime_checkable
class ImportedBySource(Protocol):
    """Reverse-import lookups, offered by sources advertising ``IMPORTED_BY``."""

    def get_imported_by(self, path: str, module_path: str, limit: int) -> list[str]:
        """Paths of packages outside module_path that import path, sorted, at most limit."""
        ...


def supports(ds: DataSource, capability: Capability) -> bool:
    """Report whether ds advertises capability."""
    return capability in ds.capabilities


__all__ = [
    "Capability",
    "DataSource",
    "ImportedBySource",
    "supports",
]
