"""
Imports and Imported By tabs.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pkgdocs.core.protocols import DataSource, ImportedBySource
from pkgdocs.domain.paths import is_std_lib_path

# Upper bound on importers fetched for one package. When the data source
# returns this many rows the total is reported as a lower bound.
IMPORTED_BY_LIMIT = 20001


@dataclass
class ImportsDetails:
    module_path: str
    # Packages outside the module.
    external_imports: list[str] = field(default_factory=list)
    # Packages in the same module.
    internal_imports: list[str] = field(default_factory=list)
    std_lib: list[str] = field(default_factory=list)


@dataclass
class ImportedByDetails:
    module_path: str
    imported_by: list[str] = field(default_factory=list)
    total: int = 0
    total_is_exact: bool = True


def fetch_imports_details(ds: DataSource, pkg_path: str, module_path: str, version: str) -> ImportsDetails:
    details = ImportsDetails(module_path=module_path)
    for imp in ds.get_imports(pkg_path, module_path, version):
        if is_std_lib_path(imp):
            details.std_lib.append(imp)
        elif imp == module_path or imp.startswith(module_path + "/"):
            details.internal_imports.append(imp)
        else:
            details.external_imports.append(imp)
    return details


def fetch_imported_by_details(ds: ImportedBySource, pkg_path: str, module_path: str) -> ImportedByDetails:
    importers = ds.get_imported_by(pkg_path, module_path, IMPORTED_BY_LIMIT)
    exact = len(importers) < IMPORTED_BY_LIMIT
    if not exact:
        importers = importers[: IMPORTED_BY_LIMIT - 1]
    return ImportedByDetails(
        module_path=module_path,
        imported_by=importers,
        total=len(importers),
        total_is_exact=exact,
    )
