"""
Versions tab.

Lists every version of a module (or every version of the modules that
contain a package), newest first, grouped by major version. Pseudo-versions
are only shown when a series has no tagged versions at all.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from pkgdocs.core.protocols import DataSource
from pkgdocs.domain import semver
from pkgdocs.domain.models import ModuleInfo
from pkgdocs.domain.paths import STDLIB_MODULE_PATH, path_suffix, series_path_for_module


@dataclass
class VersionSummary:
    version: str
    link: str
    commit_time: datetime | None = None
    is_pseudo: bool = False


@dataclass
class VersionList:
    """Versions sharing one major version, newest first."""

    major: str
    module_path: str
    versions: list[VersionSummary] = field(default_factory=list)


@dataclass
class VersionsDetails:
    this_module: list[VersionList] = field(default_factory=list)
    # Module paths outside this module's series that also provide the package.
    other_modules: list[str] = field(default_factory=list)


def package_path_in_module(v1_path: str, module_path: str) -> str:
    """Return the path a package with the given v1 path has inside module_path."""
    if module_path == STDLIB_MODULE_PATH:
        return v1_path
    suffix = path_suffix(v1_path, series_path_for_module(module_path))
    return f"{module_path}/{suffix}" if suffix else module_path


def _major_key(version: str) -> str:
    return semver.major(version) or version


def build_versions_details(
    current_module_path: str,
    versions: list[ModuleInfo],
    link_for: Callable[[ModuleInfo], str],
) -> VersionsDetails:
    """Group versions of the current series by major version.

    link_for maps a ModuleInfo to the URL its version entry links to.
    """
    series = series_path_for_module(current_module_path)
    groups: dict[str, VersionList] = {}
    other_modules: set[str] = set()

    for mi in versions:
        if series_path_for_module(mi.module_path) != series:
            other_modules.add(mi.module_path)
            continue
        key = _major_key(mi.version)
        group = groups.setdefault(key, VersionList(major=key, module_path=mi.module_path))
        group.versions.append(
            VersionSummary(
                version=mi.version,
                link=link_for(mi),
                commit_time=mi.commit_time,
                is_pseudo=semver.is_pseudo(mi.version),
            )
        )

    by_version = functools.cmp_to_key(semver.compare)
    for group in groups.values():
        group.versions.sort(key=lambda v: by_version(v.version), reverse=True)
    ordered = sorted(
        groups.values(),
        key=lambda g: by_version(g.versions[0].version),
        reverse=True,
    )
    return VersionsDetails(this_module=ordered, other_modules=sorted(other_modules))


def fetch_module_versions_details(ds: DataSource, mi: ModuleInfo) -> VersionsDetails:
    versions = ds.get_tagged_versions_for_module(mi.module_path)
    if not versions:
        versions = ds.get_pseudo_versions_for_module(mi.module_path)

    def link_for(v: ModuleInfo) -> str:
        return f"/mod/{v.module_path}@{v.version}"

    return build_versions_details(mi.module_path, versions, link_for)


def fetch_package_versions_details(
    ds: DataSource, pkg_path: str, v1_path: str, module_path: str
) -> VersionsDetails:
    versions = ds.get_tagged_versions_for_package_series(pkg_path)
    if not versions:
        versions = ds.get_pseudo_versions_for_package_series(pkg_path)

    def link_for(v: ModuleInfo) -> str:
        return f"/{package_path_in_module(v1_path, v.module_path)}@{v.version}"

    return build_versions_details(module_path, versions, link_for)
