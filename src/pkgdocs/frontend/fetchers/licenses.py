"""Licenses tab."""

from __future__ import annotations

from dataclasses import dataclass, field

from pkgdocs.core.protocols import DataSource
from pkgdocs.domain.models import License, LicenseMetadata


@dataclass
class LicenseView:
    anchor: str
    types: tuple[str, ...]
    file_path: str
    contents: str
    module_link: str


@dataclass
class LicensesDetails:
    licenses: list[LicenseView] = field(default_factory=list)


def transform_licenses(module_path: str, version: str, licenses: list[License]) -> list[LicenseView]:
    """Prepare licenses for display, in file path order."""
    ordered = sorted(licenses, key=lambda lic: lic.file_path)
    return [
        LicenseView(
            anchor=f"lic-{i}",
            types=lic.types,
            file_path=lic.file_path,
            contents=lic.contents,
            module_link=f"/mod/{module_path}@{version}",
        )
        for i, lic in enumerate(ordered)
    ]


def licenses_to_metadatas(licenses: list[License]) -> list[LicenseMetadata]:
    return [lic.metadata for lic in licenses]


def legacy_fetch_package_licenses_details(
    ds: DataSource, pkg_path: str, module_path: str, version: str
) -> LicensesDetails:
    licenses = ds.legacy_get_package_licenses(pkg_path, module_path, version)
    return LicensesDetails(licenses=transform_licenses(module_path, version, licenses))


def fetch_module_licenses_details(
    ds: DataSource, module_path: str, version: str
) -> LicensesDetails:
    licenses = ds.legacy_get_module_licenses(module_path, version)
    return LicensesDetails(licenses=transform_licenses(module_path, version, licenses))
