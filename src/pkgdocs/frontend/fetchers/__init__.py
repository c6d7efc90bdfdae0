"""
Per-tab content fetchers.

Each fetcher takes the data source and resource identifiers and returns a
display-ready payload. Data source errors propagate unchanged.
"""

from pkgdocs.frontend.fetchers.directory import (
    DirectoryDetails,
    ModuleSummary,
    PackageSummary,
    create_directory,
    fetch_directory_details,
    legacy_create_directory,
    legacy_fetch_directory_details,
)
from pkgdocs.frontend.fetchers.documentation import (
    DocumentationDetails,
    fetch_documentation_details,
    legacy_fetch_documentation_details,
)
from pkgdocs.frontend.fetchers.imports import (
    IMPORTED_BY_LIMIT,
    ImportedByDetails,
    ImportsDetails,
    fetch_imported_by_details,
    fetch_imports_details,
)
from pkgdocs.frontend.fetchers.licenses import (
    LicensesDetails,
    LicenseView,
    fetch_module_licenses_details,
    legacy_fetch_package_licenses_details,
    licenses_to_metadatas,
    transform_licenses,
)
from pkgdocs.frontend.fetchers.overview import (
    OverviewDetails,
    construct_overview_details,
    fetch_package_overview_details,
    legacy_fetch_package_overview_details,
)
from pkgdocs.frontend.fetchers.versions import (
    VersionList,
    VersionsDetails,
    VersionSummary,
    fetch_module_versions_details,
    fetch_package_versions_details,
)

__all__ = [
    "DirectoryDetails",
    "DocumentationDetails",
    "IMPORTED_BY_LIMIT",
    "ImportedByDetails",
    "ImportsDetails",
    "LicenseView",
    "LicensesDetails",
    "ModuleSummary",
    "OverviewDetails",
    "PackageSummary",
    "VersionList",
    "VersionSummary",
    "VersionsDetails",
    "construct_overview_details",
    "create_directory",
    "fetch_directory_details",
    "fetch_documentation_details",
    "fetch_imported_by_details",
    "fetch_imports_details",
    "fetch_module_licenses_details",
    "fetch_module_versions_details",
    "fetch_package_overview_details",
    "fetch_package_versions_details",
    "legacy_create_directory",
    "legacy_fetch_directory_details",
    "legacy_fetch_documentation_details",
    "legacy_fetch_package_licenses_details",
    "legacy_fetch_package_overview_details",
    "licenses_to_metadatas",
    "transform_licenses",
]
