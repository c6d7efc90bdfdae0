"""
Subdirectories tab (and the module Packages tab).

Lists the packages under a directory within one module version. Both the
legacy and the version-aware paths end in :func:`create_directory`, so the
two produce identical payloads for the same data.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pkgdocs.core.errors import InvalidArgumentError
from pkgdocs.core.protocols import DataSource
from pkgdocs.domain.models import (
    LegacyDirectory,
    LicenseMetadata,
    ModuleInfo,
    PackageMeta,
    VersionedDirectory,
)
from pkgdocs.domain.paths import STDLIB_MODULE_PATH, path_suffix


@dataclass
class ModuleSummary:
    module_path: str
    version: str
    url: str
    is_redistributable: bool = True
    license_types: list[str] = field(default_factory=list)


@dataclass
class PackageSummary:
    path: str
    name: str
    suffix: str
    url: str
    synopsis: str = ""
    is_redistributable: bool = True
    license_types: list[str] = field(default_factory=list)


@dataclass
class DirectoryDetails:
    path: str
    url: str
    module: ModuleSummary
    packages: list[PackageSummary] = field(default_factory=list)


def _license_types(licenses: list[LicenseMetadata]) -> list[str]:
    types: list[str] = []
    for lic in licenses:
        for t in lic.types:
            if t not in types:
                types.append(t)
    return types


def _check_include_dir_path(dir_path: str, module_path: str, include_dir_path: bool) -> None:
    if include_dir_path and dir_path != module_path and dir_path != STDLIB_MODULE_PATH:
        raise InvalidArgumentError(
            f"include_dir_path may only be set when the directory is the module root "
            f"(dir_path={dir_path!r}, module_path={module_path!r})"
        )


def create_directory(
    dir_path: str,
    mi: ModuleInfo,
    packages: list[PackageMeta],
    licenses: list[LicenseMetadata],
    include_dir_path: bool,
) -> DirectoryDetails:
    """Build the directory payload from the packages found under dir_path.

    The package at dir_path itself is only listed when include_dir_path
    is set.
    """
    summaries = []
    for pkg in sorted(packages, key=lambda p: p.path):
        if not include_dir_path and pkg.path == dir_path:
            continue
        summaries.append(
            PackageSummary(
                path=pkg.path,
                name=pkg.name,
                suffix=path_suffix(pkg.path, dir_path) if pkg.path != dir_path else pkg.name,
                url=f"/{pkg.path}@{mi.version}",
                synopsis=pkg.synopsis,
                is_redistributable=pkg.is_redistributable,
                license_types=_license_types(pkg.licenses),
            )
        )
    return DirectoryDetails(
        path=dir_path,
        url=f"/{dir_path}@{mi.version}",
        module=ModuleSummary(
            module_path=mi.module_path,
            version=mi.version,
            url=f"/mod/{mi.module_path}@{mi.version}",
            is_redistributable=mi.is_redistributable,
            license_types=_license_types(licenses),
        ),
        packages=summaries,
    )


def fetch_directory_details(
    ds: DataSource, vdir: VersionedDirectory, include_dir_path: bool
) -> DirectoryDetails:
    """Version-aware: list packages under vdir."""
    _check_include_dir_path(vdir.path, vdir.module_path, include_dir_path)
    packages = ds.get_packages_in_directory(vdir.path, vdir.module_path, vdir.version)
    return create_directory(vdir.path, vdir.module_info, packages, vdir.licenses, include_dir_path)


def legacy_create_directory(
    dir: LegacyDirectory, licenses: list[LicenseMetadata], include_dir_path: bool
) -> DirectoryDetails:
    packages = [p.to_meta() for p in dir.packages]
    return create_directory(dir.path, dir.module_info, packages, licenses, include_dir_path)


def legacy_fetch_directory_details(
    ds: DataSource,
    dir_path: str,
    mi: ModuleInfo,
    licenses: list[LicenseMetadata],
    include_dir_path: bool,
) -> DirectoryDetails:
    """Legacy: look the directory up again and list its packages."""
    _check_include_dir_path(dir_path, mi.module_path, include_dir_path)
    dir = ds.legacy_get_directory(dir_path, mi.module_path, mi.version)
    return legacy_create_directory(dir, licenses, include_dir_path)
