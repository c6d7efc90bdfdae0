"""
Domain records served by the frontend.

Two parallel shapes exist while the migration to version-aware
directories is in flight:

- **Legacy shape**: ``LegacyVersionedPackage``, ``LegacyDirectory`` and
  ``LegacyModuleInfo``. Package-centric; the module readme travels on the
  module info.
- **Version-aware shape**: ``VersionedDirectory``: a ``Directory`` (any
  path inside a module, optionally holding a ``Package``) at one module
  version.

Both describe the same resources. Accessor properties mirror the fields
callers used to reach through the embedded structs, so fetchers can treat
either shape uniformly where the data is the same.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from pkgdocs.domain.paths import STDLIB_MODULE_PATH, path_suffix, series_path_for_module


@dataclass(frozen=True)
class LicenseMetadata:
    """License types detected in a file, and the file's path within the module."""

    types: tuple[str, ...]
    file_path: str


@dataclass(frozen=True)
class License:
    metadata: LicenseMetadata
    contents: str

    @property
    def types(self) -> tuple[str, ...]:
        return self.metadata.types

    @property
    def file_path(self) -> str:
        return self.metadata.file_path


@dataclass(frozen=True)
class Readme:
    file_path: str
    contents: str


@dataclass(frozen=True)
class Documentation:
    """Rendered package documentation for one build context."""

    synopsis: str = ""
    goos: str = "linux"
    goarch: str = "amd64"
    html: str = ""


@dataclass
class ModuleInfo:
    """Metadata about one version of a module."""

    module_path: str
    version: str
    commit_time: datetime | None = None
    is_redistributable: bool = True
    has_go_mod: bool = True
    repository_url: str | None = None

    def series_path(self) -> str:
        return series_path_for_module(self.module_path)

    def source_url(self, suffix: str = "") -> str | None:
        """Link to a file or directory in the module's repository, at this version."""
        if not self.repository_url:
            return None
        url = f"{self.repository_url.rstrip('/')}/tree/{self.version}"
        return f"{url}/{suffix}" if suffix else url


@dataclass
class LegacyModuleInfo(ModuleInfo):
    """Module info that still carries the module-level readme."""

    legacy_readme_file_path: str | None = None
    legacy_readme_contents: str | None = None

    @property
    def readme(self) -> Readme | None:
        if self.legacy_readme_file_path is None:
            return None
        return Readme(self.legacy_readme_file_path, self.legacy_readme_contents or "")


@dataclass
class PackageMeta:
    """What a directory listing needs to know about a package."""

    path: str
    name: str
    synopsis: str = ""
    is_redistributable: bool = True
    licenses: list[LicenseMetadata] = field(default_factory=list)


@dataclass
class LegacyPackage:
    path: str
    name: str
    v1_path: str
    synopsis: str = ""
    is_redistributable: bool = True
    licenses: list[LicenseMetadata] = field(default_factory=list)
    documentation_html: str = ""
    goos: str = "linux"
    goarch: str = "amd64"
    imports: list[str] = field(default_factory=list)

    def to_meta(self) -> PackageMeta:
        return PackageMeta(
            path=self.path,
            name=self.name,
            synopsis=self.synopsis,
            is_redistributable=self.is_redistributable,
            licenses=list(self.licenses),
        )


@dataclass
class LegacyVersionedPackage:
    """A legacy package together with the module version that contains it."""

    package: LegacyPackage
    module_info: LegacyModuleInfo

    @property
    def path(self) -> str:
        return self.package.path

    @property
    def v1_path(self) -> str:
        return self.package.v1_path

    @property
    def module_path(self) -> str:
        return self.module_info.module_path

    @property
    def version(self) -> str:
        return self.module_info.version

    @property
    def licenses(self) -> list[LicenseMetadata]:
        return self.package.licenses

    @property
    def is_redistributable(self) -> bool:
        return self.package.is_redistributable

    @property
    def suffix(self) -> str:
        return path_suffix(self.path, self.module_path)


@dataclass
class LegacyDirectory:
    """A directory inside a module version, with every package below it."""

    path: str
    module_info: LegacyModuleInfo
    packages: list[LegacyPackage] = field(default_factory=list)

    @property
    def module_path(self) -> str:
        return self.module_info.module_path

    @property
    def version(self) -> str:
        return self.module_info.version


@dataclass
class DirectoryMeta:
    path: str
    v1_path: str
    is_redistributable: bool = True
    licenses: list[LicenseMetadata] = field(default_factory=list)


@dataclass
class Package:
    """The package living at a directory path, in the version-aware model."""

    name: str
    path: str
    documentation: Documentation = field(default_factory=Documentation)
    imports: list[str] = field(default_factory=list)


@dataclass
class Directory:
    meta: DirectoryMeta
    readme: Readme | None = None
    package: Package | None = None


@dataclass
class VersionedDirectory:
    """A directory at one module version (version-aware model)."""

    module_info: ModuleInfo
    directory: Directory

    @property
    def path(self) -> str:
        return self.directory.meta.path

    @property
    def v1_path(self) -> str:
        return self.directory.meta.v1_path

    @property
    def module_path(self) -> str:
        return self.module_info.module_path

    @property
    def version(self) -> str:
        return self.module_info.version

    @property
    def is_redistributable(self) -> bool:
        return self.directory.meta.is_redistributable

    @property
    def licenses(self) -> list[LicenseMetadata]:
        return self.directory.meta.licenses

    @property
    def readme(self) -> Readme | None:
        return self.directory.readme

    @property
    def package(self) -> Package | None:
        return self.directory.package

    @property
    def is_std_lib(self) -> bool:
        return self.module_path == STDLIB_MODULE_PATH


@dataclass(frozen=True)
class PathInfo:
    """Where a requested path lives: which module version, and whether it is a package."""

    path: str
    module_path: str
    version: str
    is_package: bool

    @property
    def is_module(self) -> bool:
        return self.path == self.module_path
