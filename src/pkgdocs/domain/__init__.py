"""
Domain records and path/version helpers shared by data sources and the frontend.
"""

from pkgdocs.domain.models import (
    Directory,
    DirectoryMeta,
    Documentation,
    LegacyDirectory,
    LegacyModuleInfo,
    LegacyPackage,
    LegacyVersionedPackage,
    License,
    LicenseMetadata,
    ModuleInfo,
    Package,
    PackageMeta,
    PathInfo,
    Readme,
    VersionedDirectory,
)
from pkgdocs.domain.paths import (
    LATEST_VERSION,
    STDLIB_MODULE_PATH,
    path_suffix,
    series_path_for_module,
    split_versioned_path,
    url_is_versioned,
    v1_path,
)

__all__ = [
    "Directory",
    "DirectoryMeta",
    "Documentation",
    "LegacyDirectory",
    "LegacyModuleInfo",
    "LegacyPackage",
    "LegacyVersionedPackage",
    "License",
    "LicenseMetadata",
    "ModuleInfo",
    "Package",
    "PackageMeta",
    "PathInfo",
    "Readme",
    "VersionedDirectory",
    "LATEST_VERSION",
    "STDLIB_MODULE_PATH",
    "path_suffix",
    "series_path_for_module",
    "split_versioned_path",
    "url_is_versioned",
    "v1_path",
]
