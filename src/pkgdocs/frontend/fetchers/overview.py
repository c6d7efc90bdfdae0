"""
Overview tab: module links, repository link and the readme.
"""

from __future__ import annotations

from dataclasses import dataclass

from pkgdocs.domain.models import (
    LegacyVersionedPackage,
    ModuleInfo,
    Readme,
    VersionedDirectory,
)
from pkgdocs.domain.paths import path_suffix


@dataclass
class OverviewDetails:
    module_path: str
    module_url: str
    repository_url: str | None = None
    package_source_url: str | None = None
    readme_file_path: str | None = None
    readme: str | None = None
    redistributable: bool = True


def module_url(mi: ModuleInfo, versioned_links: bool) -> str:
    """Link to the module page, pinned to mi.version when versioned_links is set."""
    if versioned_links:
        return f"/mod/{mi.module_path}@{mi.version}"
    return f"/mod/{mi.module_path}"


def construct_overview_details(
    mi: ModuleInfo,
    readme: Readme | None,
    is_redistributable: bool,
    versioned_links: bool,
) -> OverviewDetails:
    """Build the overview for a module or directory.

    versioned_links is true when the request named an explicit version;
    links then stay on that version instead of following latest. The
    readme is withheld when the content is not redistributable.
    """
    overview = OverviewDetails(
        module_path=mi.module_path,
        module_url=module_url(mi, versioned_links),
        repository_url=mi.repository_url,
        redistributable=is_redistributable,
    )
    if is_redistributable and readme is not None:
        overview.readme_file_path = readme.file_path
        overview.readme = readme.contents
    return overview


def fetch_package_overview_details(vdir: VersionedDirectory, versioned_links: bool) -> OverviewDetails:
    overview = construct_overview_details(
        vdir.module_info, vdir.readme, vdir.is_redistributable, versioned_links
    )
    overview.package_source_url = vdir.module_info.source_url(path_suffix(vdir.path, vdir.module_path))
    return overview


def legacy_fetch_package_overview_details(
    pkg: LegacyVersionedPackage, versioned_links: bool
) -> OverviewDetails:
    overview = construct_overview_details(
        pkg.module_info, pkg.module_info.readme, pkg.is_redistributable, versioned_links
    )
    overview.package_source_url = pkg.module_info.source_url(pkg.suffix)
    return overview
