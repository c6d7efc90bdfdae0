"""
Shared query logic for data sources backed by :class:`ModuleRecord` objects.

Concrete sources only decide *where* records come from (a preloaded dict,
a mirror directory on disk); every lookup in the
:class:`~pkgdocs.core.protocols.DataSource` protocol is answered here from
those records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pkgdocs.core.errors import NotFoundError
from pkgdocs.core.protocols import Capability
from pkgdocs.domain import semver
from pkgdocs.domain.models import (
    Directory,
    DirectoryMeta,
    Documentation,
    LegacyDirectory,
    LegacyModuleInfo,
    LegacyVersionedPackage,
    License,
    ModuleInfo,
    Package,
    PackageMeta,
    PathInfo,
    VersionedDirectory,
)
from pkgdocs.domain.paths import (
    LATEST_VERSION,
    STDLIB_MODULE_PATH,
    is_std_lib_path,
    series_path_for_module,
    v1_path,
)
from pkgdocs.datasource.records import ModuleRecord


class RecordBackedSource(ABC):
    """Answers data source lookups from module records."""

    capabilities: frozenset[Capability] = frozenset()

    # ------------------------------------------------------------------ #
    # Record access hooks
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _module_versions(self, module_path: str) -> list[str]:
        """Every version known for module_path (empty if the module is unknown)."""

    @abstractmethod
    def _load_record(self, module_path: str, version: str) -> ModuleRecord | None:
        """Return the record for an exact version, or None."""

    @abstractmethod
    def _series_module_paths(self, series_path: str) -> list[str]:
        """Every known module path whose series path is series_path."""

    # ------------------------------------------------------------------ #
    # Resolution
    # ------------------------------------------------------------------ #

    def _resolve_version(self, module_path: str, version: str) -> str | None:
        versions = self._module_versions(module_path)
        if not versions:
            return None
        if version != LATEST_VERSION:
            return version if version in versions else None
        tagged = [v for v in versions if not semver.is_pseudo(v)]
        return semver.sort_newest_first(tagged or versions)[0]

    def _record(self, module_path: str, version: str) -> ModuleRecord:
        resolved = self._resolve_version(module_path, version)
        record = self._load_record(module_path, resolved) if resolved else None
        if record is None:
            raise NotFoundError(f"module {module_path}@{version} not found").with_context(
                path=module_path, version=version
            )
        return record

    def _candidate_modules(self, path: str) -> list[str]:
        if is_std_lib_path(path):
            return [STDLIB_MODULE_PATH]
        parts = path.split("/")
        return ["/".join(parts[:i]) for i in range(len(parts), 0, -1)]

    def get_path_info(self, path: str, version: str) -> PathInfo:
        for module_path in self._candidate_modules(path):
            resolved = self._resolve_version(module_path, version)
            if resolved is None:
                continue
            record = self._load_record(module_path, resolved)
            if record is None:
                continue
            if record.package(path) is not None:
                return PathInfo(path, module_path, resolved, is_package=True)
            if path != STDLIB_MODULE_PATH and record.contains_directory(path):
                return PathInfo(path, module_path, resolved, is_package=False)
            if path == module_path:
                return PathInfo(path, module_path, resolved, is_package=False)
        raise NotFoundError(f"{path}@{version} not found").with_context(path=path, version=version)

    # ------------------------------------------------------------------ #
    # Version-aware lookups
    # ------------------------------------------------------------------ #

    def get_module_info(self, module_path: str, version: str) -> ModuleInfo:
        mi = self._record(module_path, version).module_info
        return ModuleInfo(
            module_path=mi.module_path,
            version=mi.version,
            commit_time=mi.commit_time,
            is_redistributable=mi.is_redistributable,
            has_go_mod=mi.has_go_mod,
            repository_url=mi.repository_url,
        )

    def get_directory(self, path: str, module_path: str, version: str) -> VersionedDirectory:
        record = self._record(module_path, version)
        if not record.contains_directory(path):
            raise NotFoundError(f"directory {path} not found in {module_path}@{version}")
        pkg = record.package(path)
        package = None
        if pkg is not None:
            package = Package(
                name=pkg.name,
                path=pkg.path,
                documentation=Documentation(
                    synopsis=pkg.synopsis,
                    goos=pkg.goos,
                    goarch=pkg.goarch,
                    html=pkg.documentation_html,
                ),
                imports=list(pkg.imports),
            )
        mi = self.get_module_info(module_path, record.version)
        return VersionedDirectory(
            module_info=mi,
            directory=Directory(
                meta=DirectoryMeta(
                    path=path,
                    v1_path=v1_path(path, module_path),
                    is_redistributable=pkg.is_redistributable if pkg else mi.is_redistributable,
                    licenses=[lic.metadata for lic in record.licenses_for(path)],
                ),
                readme=record.module_info.readme,
                package=package,
            ),
        )

    def get_packages_in_directory(self, path: str, module_path: str, version: str) -> list[PackageMeta]:
        return [p.to_meta() for p in self._record(module_path, version).packages_under(path)]

    def get_imports(self, path: str, module_path: str, version: str) -> list[str]:
        pkg = self._record(module_path, version).package(path)
        if pkg is None:
            raise NotFoundError(f"package {path} not found in {module_path}@{version}")
        return sorted(pkg.imports)

    def _versions_of(self, module_paths: list[str], *, package_v1_path: str | None, pseudo: bool) -> list[ModuleInfo]:
        infos = []
        for mp in module_paths:
            for version in self._module_versions(mp):
                if semver.is_pseudo(version) != pseudo:
                    continue
                record = self._load_record(mp, version)
                if record is None:
                    continue
                if package_v1_path is not None and not any(
                    p.v1_path == package_v1_path for p in record.packages
                ):
                    continue
                infos.append(self.get_module_info(mp, version))
        return infos

    def _package_module_paths(self, package_v1_path: str) -> list[str]:
        """Every known module path that could contain a package with this v1 path.

        A module's series path is always a prefix of the v1 paths of its
        packages, so only the series rooted at those prefixes are searched.
        """
        if is_std_lib_path(package_v1_path):
            return self._series_module_paths(STDLIB_MODULE_PATH)
        module_paths: set[str] = set()
        for prefix in self._candidate_modules(package_v1_path):
            module_paths.update(self._series_module_paths(prefix))
        return sorted(module_paths)

    def get_tagged_versions_for_module(self, module_path: str) -> list[ModuleInfo]:
        series = self._series_module_paths(series_path_for_module(module_path))
        return self._versions_of(series, package_v1_path=None, pseudo=False)

    def get_pseudo_versions_for_module(self, module_path: str) -> list[ModuleInfo]:
        series = self._series_module_paths(series_path_for_module(module_path))
        return self._versions_of(series, package_v1_path=None, pseudo=True)

    def _package_v1_path(self, path: str) -> str:
        info = self.get_path_info(path, LATEST_VERSION)
        return v1_path(path, info.module_path)

    def get_tagged_versions_for_package_series(self, path: str) -> list[ModuleInfo]:
        v1 = self._package_v1_path(path)
        return self._versions_of(self._package_module_paths(v1), package_v1_path=v1, pseudo=False)

    def get_pseudo_versions_for_package_series(self, path: str) -> list[ModuleInfo]:
        v1 = self._package_v1_path(path)
        return self._versions_of(self._package_module_paths(v1), package_v1_path=v1, pseudo=True)

    # ------------------------------------------------------------------ #
    # Legacy lookups
    # ------------------------------------------------------------------ #

    def legacy_get_module_info(self, module_path: str, version: str) -> LegacyModuleInfo:
        return self._record(module_path, version).module_info

    def legacy_get_package(self, path: str, module_path: str, version: str) -> LegacyVersionedPackage:
        record = self._record(module_path, version)
        pkg = record.package(path)
        if pkg is None:
            raise NotFoundError(f"package {path} not found in {module_path}@{version}")
        return LegacyVersionedPackage(package=pkg, module_info=record.module_info)

    def legacy_get_directory(self, path: str, module_path: str, version: str) -> LegacyDirectory:
        record = self._record(module_path, version)
        if not record.contains_directory(path):
            raise NotFoundError(f"directory {path} not found in {module_path}@{version}")
        return LegacyDirectory(
            path=path,
            module_info=record.module_info,
            packages=record.packages_under(path),
        )

    def legacy_get_module_licenses(self, module_path: str, version: str) -> list[License]:
        return list(self._record(module_path, version).licenses)

    def legacy_get_package_licenses(self, path: str, module_path: str, version: str) -> list[License]:
        record = self._record(module_path, version)
        if record.package(path) is None:
            raise NotFoundError(f"package {path} not found in {module_path}@{version}")
        return record.licenses_for(path)
